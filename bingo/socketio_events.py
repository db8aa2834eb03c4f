from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from typing import Any, Optional

from bingo.hub import GameHub
from bingo.models import HIGHEST_NUMBER, LOWEST_NUMBER, ROWS_PER_SUB_TICKET, SUB_TICKETS


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _hub() -> GameHub:
    return current_app.extensions['bingo_hub']


def _field(data: Any, key: str) -> Any:
    # Non-object payloads carry no fields
    return data.get(key) if isinstance(data, dict) else None


def _text(data: Any, key: str) -> Optional[str]:
    value = _field(data, key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _int_in_range(data: Any, key: str, low: int, high: int) -> Optional[int]:
    value = _field(data, key)
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    return value if low <= value <= high else None


def handle_connect(auth=None):
    _hub().connect(_get_sid())


def handle_disconnect(reason=None):
    sid = _get_sid()
    if _hub().leave(sid):
        current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")


def handle_join_game(data=None):
    sid = _get_sid()
    name = _text(data, 'playerName')
    if not name:
        _hub().reject(sid, 'playerName is required')
        return
    room = _text(data, 'room') or current_app.config.get('DEFAULT_ROOM', 'default')
    previous = _hub().room_of(sid)
    if previous and previous != room:
        leave_room(previous)
    join_room(room)
    return _hub().join_game(sid, room, name).to_dict()


def handle_leave_game(data=None):
    sid = _get_sid()
    room = _hub().room_of(sid)
    if room:
        leave_room(room)
    _hub().leave(sid)


def handle_call_number(data=None):
    return {'number': _hub().call_number(_get_sid())}


def handle_new_game(data=None):
    _hub().new_game(_get_sid())


def handle_reset_called_numbers(data=None):
    _hub().reset_called_numbers(_get_sid())


def handle_generate_and_send_ticket(data=None):
    sid = _get_sid()
    target = _text(data, 'connectionId')
    if not target:
        _hub().reject(sid, 'connectionId is required')
        return
    ticket = _hub().generate_and_send_ticket(sid, target)
    return {'sent': ticket is not None}


def handle_get_user_ticket(data=None):
    target = _text(data, 'connectionId')
    ticket = _hub().get_user_ticket(target) if target else None
    return {'connectionId': target, 'ticket': ticket.to_dict() if ticket else None}


def handle_get_connected_users(data=None):
    return [u.to_dict() for u in _hub().get_connected_users()]


def handle_get_called_numbers(data=None):
    hub = _hub()
    return {'numbers': hub.get_called_numbers(), 'state': hub.state.value}


def handle_line_win(data=None):
    sid = _get_sid()
    grid = _int_in_range(data, 'grid', 0, SUB_TICKETS - 1)
    row = _int_in_range(data, 'rowInGrid', 0, ROWS_PER_SUB_TICKET - 1)
    name = _text(data, 'playerName')
    if grid is None or row is None or not name:
        _hub().reject(sid, 'grid, rowInGrid and playerName are required')
        return
    _hub().line_win(grid, row, name)


def handle_full_house_win(data=None):
    sid = _get_sid()
    grid = _int_in_range(data, 'grid', 0, SUB_TICKETS - 1)
    name = _text(data, 'playerName')
    if grid is None or not name:
        _hub().reject(sid, 'grid and playerName are required')
        return
    _hub().full_house_win(grid, name)


def handle_send_number(data=None):
    sid = _get_sid()
    number = _int_in_range(data, 'number', LOWEST_NUMBER, HIGHEST_NUMBER)
    name = _text(data, 'playerName')
    if number is None or not name:
        _hub().reject(sid, 'number (1-90) and playerName are required')
        return
    _hub().send_number(_text(data, 'room'), name, number)


def handle_call_bingo(data=None):
    sid = _get_sid()
    name = _text(data, 'playerName')
    if not name:
        _hub().reject(sid, 'playerName is required')
        return
    _hub().call_bingo(_text(data, 'room'), name)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(socketio, namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    handlers = {
        'connect': handle_connect,
        'disconnect': handle_disconnect,
        'join_game': handle_join_game,
        'leave_game': handle_leave_game,
        'call_number': handle_call_number,
        'new_game': handle_new_game,
        'reset_called_numbers': handle_reset_called_numbers,
        'generate_and_send_ticket': handle_generate_and_send_ticket,
        'get_user_ticket': handle_get_user_ticket,
        'get_connected_users': handle_get_connected_users,
        'get_called_numbers': handle_get_called_numbers,
        'line_win': handle_line_win,
        'full_house_win': handle_full_house_win,
        'send_number': handle_send_number,
        'call_bingo': handle_call_bingo,
        'ping': handle_ping,
    }
    for event, handler in handlers.items():
        socketio.on_event(event, handler, namespace=namespace)
