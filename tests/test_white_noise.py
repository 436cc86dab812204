import itertools
import random

import pytest

from pinktrombone.white_noise import WhiteNoise


def test_values_in_range():
    noise = WhiteNoise(500, random.Random(1))
    values = [noise.run_step() for _ in range(500)]
    assert all(-1.0 <= v <= 1.0 for v in values)
    assert min(values) < 0.0 < max(values)


def test_buffer_loops():
    noise = WhiteNoise(16, random.Random(3))
    first = [noise.run_step() for _ in range(16)]
    second = [noise.run_step() for _ in range(16)]
    assert first == second


def test_seeded_rng_is_deterministic():
    a = WhiteNoise(32, random.Random(9))
    b = WhiteNoise(32, random.Random(9))
    assert list(itertools.islice(a, 40)) == list(itertools.islice(b, 40))


def test_iterator_matches_run_step():
    a = WhiteNoise(8, random.Random(4))
    b = WhiteNoise(8, random.Random(4))
    assert iter(a) is a
    assert [next(a) for _ in range(10)] == [b.run_step() for _ in range(10)]


def test_length():
    assert len(WhiteNoise(1024, random.Random(0))) == 1024


@pytest.mark.parametrize("length", [0, -5])
def test_bad_length(length):
    with pytest.raises(ValueError):
        WhiteNoise(length, random.Random(0))