import random
from enum import Enum
from typing import List, Optional

from bingo.models import HIGHEST_NUMBER, LOWEST_NUMBER


class NoNumbersLeft(Exception):
    pass


class RoundState(str, Enum):
    IDLE = 'idle'
    CALLING = 'calling'
    EXHAUSTED = 'exhausted'


class NumberCaller:
    """Draws numbers 1..90 without repetition until reset.

    Not synchronized; GameHub serializes access.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._called: List[int] = []
        self._called_set = set()

    def call_next(self) -> int:
        available = [n for n in range(LOWEST_NUMBER, HIGHEST_NUMBER + 1)
                     if n not in self._called_set]
        if not available:
            raise NoNumbersLeft()
        number = self._rng.choice(available)
        self._called.append(number)
        self._called_set.add(number)
        return number

    def reset(self) -> None:
        self._called.clear()
        self._called_set.clear()

    @property
    def called(self) -> List[int]:
        return list(self._called)

    @property
    def remaining(self) -> int:
        return HIGHEST_NUMBER - LOWEST_NUMBER + 1 - len(self._called)

    @property
    def state(self) -> RoundState:
        if not self._called:
            return RoundState.IDLE
        if self.remaining == 0:
            return RoundState.EXHAUSTED
        return RoundState.CALLING
