"""In-memory session models and their wire shapes."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

SUB_TICKETS = 5
ROWS_PER_SUB_TICKET = 3
ROWS = SUB_TICKETS * ROWS_PER_SUB_TICKET
COLUMNS = 9
NUMBERS_PER_ROW = 5
LOWEST_NUMBER = 1
HIGHEST_NUMBER = 90

# Upper bound on filled cells per column across the whole ticket
COLUMN_TARGETS: Tuple[int, ...] = (9, 10, 10, 10, 10, 10, 10, 10, 11)


def column_range(col: int) -> range:
    """Numbers that may appear in column ``col`` (1-9, 10-19, ..., 80-90)."""
    if col == 0:
        return range(1, 10)
    if col == COLUMNS - 1:
        return range(80, HIGHEST_NUMBER + 1)
    return range(col * 10, col * 10 + 10)


@dataclass
class Participant:
    connection_id: str
    name: str
    room: str

    def to_dict(self):
        return UserInfo(self.connection_id, self.name).to_dict()


@dataclass(frozen=True)
class UserInfo:
    connection_id: str
    player_name: str

    def to_dict(self):
        return {
            'connectionId': self.connection_id,
            'playerName': self.player_name,
        }


@dataclass(frozen=True)
class Ticket:
    """A 15x9 grid split into five 3-row sub-tickets; blanks are ``None``."""

    rows: Tuple[Tuple[Optional[int], ...], ...]

    @classmethod
    def from_rows(cls, rows) -> 'Ticket':
        return cls(tuple(tuple(row) for row in rows))

    def numbers(self) -> List[int]:
        return [n for row in self.rows for n in row if n is not None]

    def sub_ticket(self, grid: int) -> Tuple[Tuple[Optional[int], ...], ...]:
        start = grid * ROWS_PER_SUB_TICKET
        return self.rows[start:start + ROWS_PER_SUB_TICKET]

    def to_dict(self):
        return {'numbers': [list(row) for row in self.rows]}
