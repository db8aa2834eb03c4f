from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import functools
import click
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS', [])
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One hub per app: all session state lives here for the process lifetime
    from bingo.hub import GameHub
    from bingo.services import TicketGenerator
    flask_app.extensions['bingo_hub'] = GameHub(
        emit=functools.partial(socketio.emit, namespace=namespace),
        generator=TicketGenerator(
            max_attempts=flask_app.config.get('TICKET_MAX_ATTEMPTS', 10),
            max_steps=flask_app.config.get('TICKET_SEARCH_MAX_STEPS', 200000),
        ),
        default_room=flask_app.config.get('DEFAULT_ROOM', 'default'),
    )

    from bingo.main import main
    flask_app.register_blueprint(main)

    from bingo.api.admin import admin
    flask_app.register_blueprint(admin, url_prefix='/api/admin')

    from bingo.socketio_events import register_socketio_handlers
    register_socketio_handlers(socketio, namespace=namespace)

    @click.command('print-ticket')
    @click.option('--seed', type=int, default=None, help='Seed for a reproducible ticket.')
    def print_ticket_command(seed):
        """Generates one ticket and prints it as five 3x9 grids."""
        import random
        from bingo.models import ROWS_PER_SUB_TICKET
        generator = TicketGenerator(
            max_attempts=flask_app.config.get('TICKET_MAX_ATTEMPTS', 10),
            max_steps=flask_app.config.get('TICKET_SEARCH_MAX_STEPS', 200000),
            rng=random.Random(seed) if seed is not None else None,
        )
        ticket = generator.generate()
        for i, row in enumerate(ticket.rows):
            if i and i % ROWS_PER_SUB_TICKET == 0:
                click.echo('')
            click.echo(' '.join(f'{n:>2}' if n is not None else ' .' for n in row))

    flask_app.cli.add_command(print_ticket_command)

    return flask_app
