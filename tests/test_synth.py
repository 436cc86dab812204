import math

import pytest

from pinktrombone.synth import PinkTrombone


@pytest.fixture
def synth():
    return PinkTrombone(44100, seed=7)


def test_output_length_and_range(synth):
    out = synth.synthesize(256)
    assert len(out) == 256
    assert all(math.isfinite(x) and -1.0 <= x <= 1.0 for x in out)


def test_same_seed_is_deterministic():
    a = PinkTrombone(44100, seed=3)
    b = PinkTrombone(44100, seed=3)
    assert a.synthesize(128) + a.synthesize(128) == b.synthesize(128) + b.synthesize(128)


def test_zero_frames_returns_empty(synth):
    assert synth.synthesize(0) == []


def test_negative_frames_rejected(synth):
    with pytest.raises(ValueError):
        synth.synthesize(-1)


def test_bad_sample_rate_rejected():
    with pytest.raises(ValueError):
        PinkTrombone(0)


def test_frequency_is_clamped(synth):
    synth.set_frequency(1000)
    assert synth.target_frequency == 800.0
    synth.set_frequency(10)
    assert synth.target_frequency == 50.0


def test_tenseness_is_clamped(synth):
    synth.set_tenseness(1.5)
    assert synth.target_tenseness == 1.0
    synth.set_tenseness(-0.5)
    assert synth.target_tenseness == 0.0


def test_tongue_position_applies_immediately(synth):
    before = list(synth.tract_diameters)
    synth.set_tongue_position(25.0, 2.05)
    assert synth.current_tongue_index == 25.0
    assert synth.target_tongue_diameter == 2.05
    assert synth.props.tongue_index == 25.0
    assert synth.tract_diameters != before
    assert synth.tract_diameters == synth.tract.shape.rest_diameter


def test_constriction_fricative_clamped(synth):
    synth.set_constriction(20.0, 0.5, 3.0)
    assert synth.target_constriction_index == 20.0
    assert synth.target_constriction_diameter == 0.5
    assert synth.target_fricative == 1.0


def test_vibrato_is_clamped(synth):
    synth.set_vibrato(1.0, 100.0)
    assert synth.glottis.vibrato_amount == 0.1
    assert synth.glottis.vibrato_frequency == 15.0
    synth.set_vibrato(-1.0, 0.0)
    assert synth.glottis.vibrato_amount == 0.0
    assert synth.glottis.vibrato_frequency == 1.0


def test_smoothing_time_is_clamped(synth):
    synth.set_parameter_smoothing_time(5.0)
    assert synth.smoothing_time == 2.0
    synth.set_parameter_smoothing_time(-1.0)
    assert synth.smoothing_time == 0.0


def test_zero_smoothing_jumps_to_target(synth):
    synth.set_parameter_smoothing_time(0.0)
    synth.set_frequency(300.0)
    synth.synthesize(1)
    assert synth.current_frequency == 300.0
    assert synth.glottis.target_frequency == 300.0


def test_smoothing_moves_part_way(synth):
    synth.set_frequency(300.0)
    synth.synthesize(1)
    assert 140.0 < synth.current_frequency < 300.0


def test_lengths_match_layout(synth):
    assert synth.tract_length == 44
    assert synth.nose_length == 28
    assert len(synth.tract_diameters) == synth.tract_length
    assert len(synth.nose_diameters) == synth.nose_length