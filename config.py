import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    ALLOWED_ORIGINS = [
        o.strip() for o in os.environ.get(
            'ALLOWED_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
        ).split(',') if o.strip()
    ]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Room assigned to players that join without naming one
    DEFAULT_ROOM = os.environ.get('DEFAULT_ROOM', 'default')
    # Ticket generation: attempts before reporting a failure, and search steps per attempt
    TICKET_MAX_ATTEMPTS = int(os.environ.get('TICKET_MAX_ATTEMPTS', '10'))
    TICKET_SEARCH_MAX_STEPS = int(os.environ.get('TICKET_SEARCH_MAX_STEPS', '200000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
