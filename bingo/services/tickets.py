import random
from typing import List, Optional

from bingo.models import (
    COLUMN_TARGETS,
    COLUMNS,
    NUMBERS_PER_ROW,
    ROWS,
    Ticket,
    column_range,
)


class GenerationFailed(Exception):
    """Every attempt at building a ticket mask ran out of budget."""

    def __init__(self, attempts: int):
        super().__init__(f'Failed to generate a valid ticket after {attempts} attempts.')
        self.attempts = attempts


class InvalidTicket(ValueError):
    pass


class _SearchExhausted(Exception):
    pass


class TicketGenerator:
    """Builds 15x9 tickets: a backtracking search for the blank/filled mask,
    then column-wise assignment of shuffled numbers.

    Holds no mutable state between calls, so one instance can be shared by
    concurrent handlers. Pass ``rng`` only for reproducible output.
    """

    def __init__(self, max_attempts: int = 10, max_steps: int = 200000,
                 rng: Optional[random.Random] = None):
        if max_attempts < 1:
            raise ValueError('max_attempts must be at least 1')
        self.max_attempts = max_attempts
        self.max_steps = max_steps
        self._rng = rng

    def generate(self) -> Ticket:
        rng = self._rng or random.Random()
        for _ in range(self.max_attempts):
            try:
                mask = self._build_mask(rng)
            except _SearchExhausted:
                continue
            return self._fill_numbers(mask, rng)
        raise GenerationFailed(self.max_attempts)

    def _build_mask(self, rng: random.Random) -> List[List[bool]]:
        total = ROWS * COLUMNS
        mask = [[False] * COLUMNS for _ in range(ROWS)]
        row_counts = [0] * ROWS
        col_counts = [0] * COLUMNS
        # pending[i] holds the untried branches for cell i on the current path
        pending = [_branch_order(rng)]
        cell = 0
        steps = 0
        while cell < total:
            if cell < 0:
                raise _SearchExhausted()
            steps += 1
            if steps > self.max_steps:
                raise _SearchExhausted()
            row, col = divmod(cell, COLUMNS)
            if mask[row][col]:
                mask[row][col] = False
                row_counts[row] -= 1
                col_counts[col] -= 1

            placed = False
            options = pending[cell]
            while options:
                filled = options.pop()
                if filled and (row_counts[row] >= NUMBERS_PER_ROW
                               or col_counts[col] >= COLUMN_TARGETS[col]):
                    continue
                # The row must still be able to reach its quota with the cells left
                if row_counts[row] + filled + (COLUMNS - 1 - col) < NUMBERS_PER_ROW:
                    continue
                if filled:
                    mask[row][col] = True
                    row_counts[row] += 1
                    col_counts[col] += 1
                placed = True
                break

            if placed:
                cell += 1
                pending.append(_branch_order(rng))
            else:
                pending.pop()
                cell -= 1
        return mask

    @staticmethod
    def _fill_numbers(mask: List[List[bool]], rng: random.Random) -> Ticket:
        pools = []
        for col in range(COLUMNS):
            pool = list(column_range(col))
            rng.shuffle(pool)
            pools.append(pool)
        rows = []
        for r in range(ROWS):
            rows.append([pools[c].pop(0) if mask[r][c] else None for c in range(COLUMNS)])
        return Ticket.from_rows(rows)


def _branch_order(rng: random.Random) -> List[bool]:
    options = [True, False]
    rng.shuffle(options)
    return options


def validate_ticket(ticket: Ticket) -> None:
    """Raise InvalidTicket describing the first broken invariant."""
    if len(ticket.rows) != ROWS:
        raise InvalidTicket(f'expected {ROWS} rows, got {len(ticket.rows)}')
    col_counts = [0] * COLUMNS
    seen = set()
    for r, row in enumerate(ticket.rows):
        if len(row) != COLUMNS:
            raise InvalidTicket(f'row {r} has {len(row)} cells')
        filled = [n for n in row if n is not None]
        if len(filled) != NUMBERS_PER_ROW:
            raise InvalidTicket(f'row {r} has {len(filled)} numbers')
        for c, n in enumerate(row):
            if n is None:
                continue
            if n not in column_range(c):
                raise InvalidTicket(f'{n} is outside the range of column {c}')
            if n in seen:
                raise InvalidTicket(f'{n} appears more than once')
            seen.add(n)
            col_counts[c] += 1
    for c, count in enumerate(col_counts):
        if count > COLUMN_TARGETS[c]:
            raise InvalidTicket(f'column {c} has {count} numbers, limit {COLUMN_TARGETS[c]}')
