import pytest

from pinktrombone.voice import Voice, Vowel


@pytest.fixture
def voice():
    v = Voice()
    v.setup(44100, 512)
    return v


def test_silence_before_setup():
    v = Voice()
    assert v.synthesize(64) == [0.0] * 64
    assert v.tract_diameters is None
    assert v.tract_length == 0


def test_setters_ignored_before_setup():
    v = Voice()
    v.set_frequency(300)
    v.set_vowel(Vowel.A)
    assert v.engine is None
    assert v.nose_length == 0


def test_synthesize_after_setup(voice):
    out = voice.synthesize(128)
    assert len(out) == 128
    assert all(-1.0 <= x <= 1.0 for x in out)
    assert voice.tract_length == 44


def test_close_returns_to_silence(voice):
    voice.close()
    assert voice.is_setup is False
    assert voice.synthesize(8) == [0.0] * 8


def test_context_manager_closes():
    with Voice() as v:
        assert v.is_setup is True
        assert len(v.synthesize(16)) == 16
    assert v.is_setup is False


def test_negative_frames_rejected(voice):
    with pytest.raises(ValueError):
        voice.synthesize(-4)


def test_tongue_position_clamped(voice):
    voice.set_tongue_position(0.0, 10.0)
    engine = voice.engine
    assert engine.target_tongue_index == engine.tract.tongue_index_lower_bound()
    assert engine.target_tongue_diameter == 3.5
    voice.set_tongue_position(100.0, 0.0)
    assert engine.target_tongue_index == engine.tract.tongue_index_upper_bound()
    assert engine.target_tongue_diameter == 1.0


def test_vowel_preset(voice):
    voice.set_vowel(Vowel.I)
    engine = voice.engine
    assert engine.target_tongue_index == Vowel.I.index
    assert engine.target_tongue_diameter == Vowel.I.diameter
    assert engine.target_constriction_index == -1.0
    assert engine.target_fricative == 0.0


def test_vowel_by_letter(voice):
    voice.set_vowel("e")
    assert voice.engine.target_tongue_index == Vowel.E.index


def test_unknown_vowel_rejected(voice):
    with pytest.raises(ValueError):
        voice.set_vowel("x")


def test_silence_preset(voice):
    voice.set_silence()
    engine = voice.engine
    assert engine.target_tenseness == 0.0
    assert engine.target_constriction_index == 15.0
    assert engine.target_constriction_diameter == 0.0


def test_tenseness_clamped(voice):
    voice.set_tenseness(2.0)
    assert voice.engine.target_tenseness == 1.0


def test_diameters_are_copies(voice):
    diameters = voice.tract_diameters
    diameters[0] = -5.0
    assert voice.tract_diameters[0] != -5.0
    assert len(voice.nose_diameters) == voice.nose_length