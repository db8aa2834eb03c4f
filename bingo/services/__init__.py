"""Bingo domain services: ticket generation, number calling and the
participant registry.

Nothing here knows about Socket.IO or Flask; GameHub wires these together
and owns their synchronization.
"""

from .caller import NoNumbersLeft, NumberCaller, RoundState
from .registry import SessionRegistry
from .tickets import GenerationFailed, InvalidTicket, TicketGenerator, validate_ticket
