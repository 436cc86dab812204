import pytest

from pinktrombone.glottis import Glottis
from pinktrombone.noise import SimplexNoise

RATE = 44100.0
BLOCK = 512


def _run(glottis, blocks, noise_value=0.0):
    samples = []
    for _ in range(blocks):
        for k in range(BLOCK):
            samples.append(glottis.run_step(k / BLOCK, noise_value))
        glottis.finish_block()
    return samples


def test_defaults():
    g = Glottis(RATE, SimplexNoise(1))
    assert g.vibrato_amount == 0.005
    assert g.vibrato_frequency == 6.0
    assert g.target_frequency == 140.0
    assert g.target_tenseness == 0.6
    assert g.waveform_length == pytest.approx(1.0 / 140.0)


def test_initial_noise_modulator():
    g = Glottis(RATE, SimplexNoise(1))
    assert g.noise_modulator() == pytest.approx(0.3)


def test_silent_before_first_block():
    g = Glottis(RATE, SimplexNoise(1))
    assert all(g.run_step(k / BLOCK, 0.5) == 0.0 for k in range(BLOCK))


def test_intensity_ramps_and_clamps():
    g = Glottis(RATE, SimplexNoise(1))
    levels = []
    for _ in range(12):
        g.finish_block()
        levels.append(g.intensity)
    assert levels == sorted(levels)
    assert levels[-1] == 1.0


def test_intensity_falls_when_not_voicing():
    g = Glottis(RATE, SimplexNoise(1))
    for _ in range(10):
        g.finish_block()
    g.always_voice = False
    before = g.intensity
    g.finish_block()
    assert g.intensity == pytest.approx(before - 0.05)


def test_output_is_voiced_and_bounded():
    g = Glottis(RATE, SimplexNoise(2))
    samples = _run(g, 20)
    tail = samples[-BLOCK * 5:]
    assert max(abs(v) for v in tail) > 0.1
    assert all(abs(v) < 5.0 for v in samples)


def test_deterministic_with_same_noise_seed():
    a = _run(Glottis(RATE, SimplexNoise(5)), 4, 0.25)
    b = _run(Glottis(RATE, SimplexNoise(5)), 4, 0.25)
    assert a == b


def test_frequency_follows_target():
    g = Glottis(RATE, SimplexNoise(3))
    g.target_frequency = 200.0
    _run(g, 50)
    assert g.frequency == pytest.approx(200.0, rel=0.1)


def test_noise_modulator_bounded_after_voicing():
    g = Glottis(RATE, SimplexNoise(4))
    _run(g, 10)
    assert 0.1 <= g.noise_modulator() <= 0.3 + 1e-9


def test_bad_sample_rate():
    with pytest.raises(ValueError):
        Glottis(0.0)