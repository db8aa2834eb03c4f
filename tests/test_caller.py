import random

import pytest

from bingo.services import NoNumbersLeft, NumberCaller, RoundState


def test_ninety_calls_are_a_permutation():
    caller = NumberCaller(rng=random.Random(1))
    drawn = [caller.call_next() for _ in range(90)]
    assert sorted(drawn) == list(range(1, 91))
    assert caller.called == drawn
    with pytest.raises(NoNumbersLeft):
        caller.call_next()


def test_state_follows_round():
    caller = NumberCaller(rng=random.Random(2))
    assert caller.state is RoundState.IDLE
    caller.call_next()
    assert caller.state is RoundState.CALLING
    assert caller.remaining == 89
    for _ in range(89):
        caller.call_next()
    assert caller.state is RoundState.EXHAUSTED
    caller.reset()
    assert caller.state is RoundState.IDLE


def test_reset_is_idempotent_and_allows_repeats():
    caller = NumberCaller(rng=random.Random(3))
    first = [caller.call_next() for _ in range(90)]
    caller.reset()
    caller.reset()
    assert caller.called == []
    assert caller.remaining == 90
    again = caller.call_next()
    assert again in first


def test_called_is_a_snapshot():
    caller = NumberCaller(rng=random.Random(4))
    caller.call_next()
    snapshot = caller.called
    snapshot.append(999)
    assert 999 not in caller.called


def test_draw_is_spread_over_the_range():
    seen = set()
    for seed in range(200):
        seen.add(NumberCaller(rng=random.Random(seed)).call_next())
    assert len(seen) > 60
    assert all(1 <= n <= 90 for n in seen)
