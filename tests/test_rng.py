import pytest

from falling_blocks.game import rng
from falling_blocks.game.rng import initial_seed, next_seed, randint, seed_from_clock


def test_randint_is_deterministic():
    assert randint(1234, 0, 6) == randint(1234, 0, 6)


def test_randint_advances_seed_by_one_step():
    _, advanced = randint(99, 0, 6)
    assert advanced == next_seed(99)


def test_randint_stays_in_range():
    seed = initial_seed(42)
    seen = set()
    for _ in range(500):
        value, seed = randint(seed, 0, 6)
        assert 0 <= value <= 6
        seen.add(value)
    assert seen == set(range(7))


def test_initial_seed_is_32_bit():
    assert initial_seed(-1) == 0xFFFFFFFF
    assert initial_seed(2**40 + 5) == 5


def test_randint_rejects_empty_range():
    with pytest.raises(ValueError):
        randint(0, 3, 2)


def test_seed_from_clock_follows_wall_clock(monkeypatch):
    readings = iter([1_700_000_000_123_456_789, 1_700_000_000_987_654_321])
    monkeypatch.setattr(rng.time, "time_ns", lambda: next(readings))
    first = seed_from_clock()
    second = seed_from_clock()
    assert first == initial_seed(1_700_000_000_123_456_789)
    assert first != second
    assert 0 <= first <= 0xFFFFFFFF
