# pinktrombone

A small articulatory speech synthesizer in pure Python. A glottal pulse source
(Liljencrants–Fant waveform with simplex-noise jitter and aspiration noise)
drives a digital waveguide model of the vocal tract and the nasal cavity. You
shape the sound by moving the tongue, adding constrictions and changing the
pitch and tenseness of the voice. Output is a list of float samples in
`[-1, 1]`.

## Installation

```
pip install .
```

It has no runtime dependencies.

## Quick start

```python
from pinktrombone.voice import Voice, Vowel

with Voice() as voice:              # sets up a 44100 Hz engine
    voice.set_frequency(220.0)
    voice.set_tenseness(0.6)
    voice.set_vowel(Vowel.A)

    block = voice.synthesize(512)   # list of 512 floats in [-1, 1]

    voice.set_vowel("i")            # a letter works too
    more = voice.synthesize(512)

    voice.set_silence()
```

Entering the `with` block calls `setup` if the voice has no engine yet, and
leaving it calls `close`. Outside of that you can call `setup(sample_rate,
buffer_size)` and `close()` yourself. Without an engine, `synthesize` returns
silence and the control methods do nothing.

## Controls

`Voice` (in `pinktrombone.voice`) is the high-level interface:

- `set_frequency(hz)`: target pitch, clamped to 50–800 Hz.
- `set_tenseness(value)`: vocal fold tension, clamped to 0 (breathy) to 1
  (pressed).
- `set_tongue_position(index, diameter)`: tongue position along the tract and
  its height. The index is clamped to the tract's tongue range (12 to 29 for
  the 44-segment tract) and the diameter to 1.0–3.5. The tongue moves at once,
  without smoothing.
- `set_constriction(index, diameter, fricative=0.0)`: an extra narrowing of
  the tract, for example by the lips or the tongue tip. `fricative` (clamped to
  0–1) sets how much turbulence noise it produces. An index below 2 narrows
  nothing.
- `set_vibrato(amount, frequency)`: vibrato depth (0–0.1) and rate (1–15 Hz).
- `set_parameter_smoothing_time(seconds)`: how quickly pitch, tenseness and
  constriction changes glide (0–2 s; 0 means no smoothing).
- `set_vowel(vowel)`: a `Vowel` (`A`, `E`, `I`, `O`, `U`) or its letter; an
  unknown letter raises `ValueError`.
- `set_silence()`: relaxes the glottis and closes the tract.

For display, `tract_diameters` and `nose_diameters` give copies of the current
segment diameters (or `None` without an engine), and `tract_length` and
`nose_length` give the segment counts (0 without an engine).

## Lower-level engine

`pinktrombone.synth.PinkTrombone` is the engine under `Voice`. It takes a sample
rate and an optional seed; with a seed its output is reproducible:

```python
from pinktrombone.synth import PinkTrombone

engine = PinkTrombone(44100, seed=1)
engine.set_tongue_position(20.0, 2.4)
samples = engine.synthesize(1024)
```

Its building blocks can be used on their own:

- `pinktrombone.glottis.Glottis`: the glottal source.
- `pinktrombone.tract.Tract`: the oral and nasal waveguides.
- `pinktrombone.tract_shape.TractProps` and `TractShape`: tract layout and
  diameters.
- `pinktrombone.biquad.Biquad`: a band-pass filter.
- `pinktrombone.white_noise.WhiteNoise`: a looping buffer of uniform noise.
- `pinktrombone.noise.SimplexNoise`: seedable simplex noise.
- `pinktrombone.util`: constants plus `clamp`, `move_towards` and `gaussian`.

## What it does not do

The package only computes samples. It does not play audio, open a sound
device, write audio files or draw the tract; hand the returned samples to
whatever audio or plotting library you use. It has no command-line program.

## Tests

```
pip install .[test]
pytest
```