"""GameHub: the single authority over session state.

Every command mutates shared state under one coarse lock and, before
releasing it, takes a dispatch sequence number. Fan-out through ``emit``
happens outside the lock, in sequence order, so observers see events in
mutation order while slow fan-out never holds up mutations or queries.
"""

import logging
import threading
from typing import Callable, List, Optional

from bingo.events import Event, Outbound, Scope, Target
from bingo.models import Ticket, UserInfo
from bingo.services import (
    GenerationFailed,
    NoNumbersLeft,
    NumberCaller,
    RoundState,
    SessionRegistry,
    TicketGenerator,
)

logger = logging.getLogger(__name__)

# emit(event_name, payload, to=room_or_sid_or_None)
Emitter = Callable[..., None]


class GameHub:
    def __init__(self, emit: Emitter, generator: Optional[TicketGenerator] = None,
                 caller: Optional[NumberCaller] = None,
                 registry: Optional[SessionRegistry] = None,
                 default_room: str = 'default'):
        self._emit = emit
        self.generator = generator or TicketGenerator()
        self.caller = caller or NumberCaller()
        self.registry = registry or SessionRegistry()
        self.default_room = default_room
        self._lock = threading.Lock()
        # _next_seq is guarded by _lock, _serving by _turn
        self._turn = threading.Condition()
        self._next_seq = 0
        self._serving = 0

    # ---- Connection lifecycle ----

    def connect(self, sid: str) -> None:
        with self._lock:
            outbound = [
                Outbound(Event.connected(sid), Target.client(sid)),
                Outbound(Event.user_list_updated(self.registry.list_participants()), Target.everyone()),
            ]
            seq = self._take_seq()
        self._dispatch(seq, outbound)

    def join_game(self, sid: str, room: Optional[str], name: str) -> UserInfo:
        room = room or self.default_room
        with self._lock:
            self.registry.join(sid, room, name)
            users = self.registry.list_participants()
            outbound = [
                Outbound(Event.player_joined(name), Target.room(room)),
                Outbound(Event.called_numbers_sync(self.caller.called), Target.client(sid)),
                Outbound(Event.user_list_updated(users), Target.everyone()),
            ]
            seq = self._take_seq()
        self._dispatch(seq, outbound)
        logger.info(f"[join] sid={sid} room={room} name={name} players={len(users)}")
        return UserInfo(sid, name)

    def leave(self, sid: str) -> bool:
        """Remove a participant (explicit leave or transport disconnect)."""
        with self._lock:
            removed = self.registry.leave(sid)
            users = self.registry.list_participants()
            outbound = [Outbound(Event.user_list_updated(users), Target.everyone())]
            seq = self._take_seq()
        self._dispatch(seq, outbound)
        if removed:
            logger.info(f"[leave] sid={sid} name={removed.name} players={len(users)}")
        return removed is not None

    def room_of(self, sid: str) -> Optional[str]:
        with self._lock:
            participant = self.registry.get(sid)
            return participant.room if participant else None

    # ---- Admin: number calling ----

    def call_number(self, sid: Optional[str] = None) -> Optional[int]:
        """Draw the next number; ``None`` once all numbers are out."""
        with self._lock:
            try:
                number = self.caller.call_next()
            except NoNumbersLeft:
                number = None
            if number is None:
                outbound = self._to_caller(sid, Event.no_numbers_left())
            else:
                outbound = [Outbound(Event.number_called(number), Target.everyone())]
            seq = self._take_seq()
        self._dispatch(seq, outbound)
        if number is None:
            logger.info(f"[call-exhausted] sid={sid}")
        else:
            logger.info(f"[call] sid={sid} number={number}")
        return number

    def new_game(self, sid: Optional[str] = None) -> None:
        with self._lock:
            self.caller.reset()
            outbound = [Outbound(Event.new_game_started(), Target.everyone())]
            seq = self._take_seq()
        self._dispatch(seq, outbound)
        logger.info(f"[new-game] sid={sid}")

    def reset_called_numbers(self, sid: Optional[str] = None) -> None:
        with self._lock:
            self.caller.reset()
            outbound = [Outbound(Event.called_numbers_reset(), Target.everyone())]
            seq = self._take_seq()
        self._dispatch(seq, outbound)
        logger.info(f"[reset-called] sid={sid}")

    # ---- Admin: tickets ----

    def generate_and_send_ticket(self, sid: Optional[str], target_sid: str) -> Optional[Ticket]:
        # The generator is stateless; only storing the result needs the lock
        try:
            ticket = self.generator.generate()
        except GenerationFailed as exc:
            logger.warning(f"[ticket-failed] sid={sid} target={target_sid} attempts={exc.attempts}")
            self._announce(self._to_caller(sid, Event.ticket_generation_failed(str(exc))))
            return None

        with self._lock:
            stored = self.registry.set_ticket(target_sid, ticket)
            outbound = (
                [Outbound(Event.receive_ticket(ticket), Target.client(target_sid))]
                + self._to_caller(sid, Event.ticket_generated_and_sent(self.registry.display_name(target_sid)))
            )
            seq = self._take_seq()
        self._dispatch(seq, outbound)
        logger.info(f"[ticket] sid={sid} target={target_sid} stored={stored}")
        return ticket

    # ---- Admin queries ----

    def get_user_ticket(self, connection_id: str) -> Optional[Ticket]:
        with self._lock:
            return self.registry.get_ticket(connection_id)

    def get_connected_users(self) -> List[UserInfo]:
        with self._lock:
            return self.registry.list_participants()

    def get_called_numbers(self) -> List[int]:
        with self._lock:
            return self.caller.called

    @property
    def state(self) -> RoundState:
        with self._lock:
            return self.caller.state

    # ---- Announcements ----

    def line_win(self, grid: int, row_in_grid: int, name: str) -> None:
        self._announce([Outbound(Event.line_win_announced(grid, row_in_grid, name), Target.everyone())])
        logger.info(f"[line-win] grid={grid} row={row_in_grid} name={name}")

    def full_house_win(self, grid: int, name: str) -> None:
        self._announce([Outbound(Event.full_house_win_announced(grid, name), Target.everyone())])
        logger.info(f"[full-house] grid={grid} name={name}")

    def send_number(self, room: Optional[str], name: str, number: int) -> None:
        self._announce([Outbound(Event.receive_number(name, number), Target.room(room or self.default_room))])

    def call_bingo(self, room: Optional[str], name: str) -> None:
        self._announce([Outbound(Event.bingo_called(name), Target.room(room or self.default_room))])
        logger.info(f"[bingo] room={room or self.default_room} name={name}")

    def reject(self, sid: str, message: str) -> None:
        self._announce([Outbound(Event.error(message), Target.client(sid))])

    # ---- Dispatch helpers ----

    def _announce(self, outbound: List[Outbound]) -> None:
        with self._lock:
            seq = self._take_seq()
        self._dispatch(seq, outbound)

    @staticmethod
    def _to_caller(sid: Optional[str], event: Event) -> List[Outbound]:
        # Commands without a socket caller (HTTP) have nobody to notify
        return [Outbound(event, Target.client(sid))] if sid else []

    def _take_seq(self) -> int:
        """Reserve the next dispatch slot; call with ``_lock`` held."""
        seq = self._next_seq
        self._next_seq += 1
        return seq

    def _dispatch(self, seq: int, outbound: List[Outbound]) -> None:
        """Emit ``outbound`` once every earlier sequence has been dispatched."""
        with self._turn:
            while self._serving != seq:
                self._turn.wait()
        try:
            for item in outbound:
                to = None if item.target.scope is Scope.ALL else item.target.name
                self._emit(item.event.kind.value, item.event.payload, to=to)
        finally:
            with self._turn:
                self._serving += 1
                self._turn.notify_all()
