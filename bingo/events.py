"""Outbound events and their fan-out targets.

Every event the hub can emit has one constructor here, so the set of
event names and payload shapes stays closed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from bingo.models import Ticket, UserInfo


class EventKind(str, Enum):
    CONNECTED = 'connected'
    PLAYER_JOINED = 'player_joined'
    USER_LIST_UPDATED = 'user_list_updated'
    CALLED_NUMBERS_SYNC = 'called_numbers_sync'
    NUMBER_CALLED = 'number_called'
    NO_NUMBERS_LEFT = 'no_numbers_left'
    NEW_GAME_STARTED = 'new_game_started'
    CALLED_NUMBERS_RESET = 'called_numbers_reset'
    RECEIVE_TICKET = 'receive_ticket'
    TICKET_GENERATED_AND_SENT = 'ticket_generated_and_sent'
    TICKET_GENERATION_FAILED = 'ticket_generation_failed'
    LINE_WIN_ANNOUNCED = 'line_win_announced'
    FULL_HOUSE_WIN_ANNOUNCED = 'full_house_win_announced'
    RECEIVE_NUMBER = 'receive_number'
    BINGO_CALLED = 'bingo_called'
    ERROR = 'error'


class Scope(str, Enum):
    ALL = 'all'
    ROOM = 'room'
    CLIENT = 'client'


@dataclass(frozen=True)
class Target:
    scope: Scope
    name: Optional[str] = None

    @classmethod
    def everyone(cls) -> 'Target':
        return cls(Scope.ALL)

    @classmethod
    def room(cls, room: str) -> 'Target':
        return cls(Scope.ROOM, room)

    @classmethod
    def client(cls, connection_id: str) -> 'Target':
        return cls(Scope.CLIENT, connection_id)


@dataclass(frozen=True)
class Event:
    kind: EventKind
    payload: Any = None

    @classmethod
    def connected(cls, connection_id: str) -> 'Event':
        return cls(EventKind.CONNECTED, {'message': 'Connected to bingo hub', 'connectionId': connection_id})

    @classmethod
    def player_joined(cls, name: str) -> 'Event':
        return cls(EventKind.PLAYER_JOINED, {'playerName': name})

    @classmethod
    def user_list_updated(cls, users: List[UserInfo]) -> 'Event':
        return cls(EventKind.USER_LIST_UPDATED, [u.to_dict() for u in users])

    @classmethod
    def called_numbers_sync(cls, numbers: List[int]) -> 'Event':
        return cls(EventKind.CALLED_NUMBERS_SYNC, {'numbers': list(numbers)})

    @classmethod
    def number_called(cls, number: int) -> 'Event':
        return cls(EventKind.NUMBER_CALLED, {'number': number})

    @classmethod
    def no_numbers_left(cls) -> 'Event':
        return cls(EventKind.NO_NUMBERS_LEFT, {'message': 'All 90 numbers have been called.'})

    @classmethod
    def new_game_started(cls) -> 'Event':
        return cls(EventKind.NEW_GAME_STARTED, {})

    @classmethod
    def called_numbers_reset(cls) -> 'Event':
        return cls(EventKind.CALLED_NUMBERS_RESET, {})

    @classmethod
    def receive_ticket(cls, ticket: Ticket) -> 'Event':
        return cls(EventKind.RECEIVE_TICKET, ticket.to_dict())

    @classmethod
    def ticket_generated_and_sent(cls, user_label: str) -> 'Event':
        return cls(EventKind.TICKET_GENERATED_AND_SENT,
                   {'message': f'Ticket generated successful for user {user_label}'})

    @classmethod
    def ticket_generation_failed(cls, message: str) -> 'Event':
        return cls(EventKind.TICKET_GENERATION_FAILED, {'message': message})

    @classmethod
    def line_win_announced(cls, grid: int, row_in_grid: int, name: str) -> 'Event':
        return cls(EventKind.LINE_WIN_ANNOUNCED,
                   {'grid': grid, 'rowInGrid': row_in_grid, 'playerName': name})

    @classmethod
    def full_house_win_announced(cls, grid: int, name: str) -> 'Event':
        return cls(EventKind.FULL_HOUSE_WIN_ANNOUNCED, {'grid': grid, 'playerName': name})

    @classmethod
    def receive_number(cls, name: str, number: int) -> 'Event':
        return cls(EventKind.RECEIVE_NUMBER, {'playerName': name, 'number': number})

    @classmethod
    def bingo_called(cls, name: str) -> 'Event':
        return cls(EventKind.BINGO_CALLED, {'playerName': name})

    @classmethod
    def error(cls, message: str) -> 'Event':
        return cls(EventKind.ERROR, {'message': message})


@dataclass(frozen=True)
class Outbound:
    event: Event
    target: Target
