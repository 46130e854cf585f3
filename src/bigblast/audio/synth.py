"""
Waveform and envelope generation for the game's sound set.

Everything is rendered up front into numpy arrays of floats in [-1, 1]
and converted to 16-bit stereo once, so nothing is synthesized during play.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

SAMPLE_RATE = 44100

Samples = NDArray[np.float64]
Frequency = Union[float, Samples]


class WaveType(Enum):
    """Oscillator waveform types."""
    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"
    NOISE = "noise"


@dataclass
class ADSR:
    """Attack-Decay-Sustain-Release envelope."""
    attack: float = 0.01   # seconds
    decay: float = 0.1     # seconds
    sustain: float = 0.7   # level (0-1)
    release: float = 0.2   # seconds

    def render(self, num_samples: int, sample_rate: int = SAMPLE_RATE) -> Samples:
        """Envelope over ``num_samples``; the release ends the sound."""
        t = np.arange(num_samples) / sample_rate
        duration = num_samples / sample_rate
        note_off = max(0.0, duration - self.release)

        env = np.full(num_samples, self.sustain, dtype=np.float64)

        if self.attack > 0:
            attack_mask = t < self.attack
            env[attack_mask] = t[attack_mask] / self.attack

        decay_mask = (t >= self.attack) & (t < self.attack + self.decay)
        if self.decay > 0:
            progress = (t[decay_mask] - self.attack) / self.decay
            env[decay_mask] = 1.0 - (1.0 - self.sustain) * progress

        if self.release > 0:
            release_mask = t >= note_off
            level = env[release_mask][0] if release_mask.any() else self.sustain
            progress = (t[release_mask] - note_off) / self.release
            env[release_mask] = level * np.clip(1.0 - progress, 0.0, 1.0)

        return env


def oscillator(
    wave: WaveType,
    freq: Frequency,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    seed: int = 0xACE1,
) -> Samples:
    """Raw waveform. ``freq`` may be a per-sample array for sweeps."""
    num_samples = int(sample_rate * duration)

    if wave == WaveType.NOISE:
        return np.random.default_rng(seed).uniform(-1.0, 1.0, num_samples)

    freqs = np.broadcast_to(np.asarray(freq, dtype=np.float64), (num_samples,))
    phase = np.cumsum(freqs) / sample_rate % 1.0

    if wave == WaveType.SINE:
        return np.sin(2 * np.pi * phase)
    if wave == WaveType.SQUARE:
        return np.where(phase < 0.5, 1.0, -1.0)
    if wave == WaveType.SAWTOOTH:
        return 2.0 * phase - 1.0
    if wave == WaveType.TRIANGLE:
        return 4.0 * np.abs(phase - 0.5) - 1.0
    raise ValueError(f"Unknown wave type: {wave}")


def tone(
    wave: WaveType,
    freq: float,
    duration: float,
    amplitude: float = 0.5,
    envelope: Optional[ADSR] = None,
) -> Samples:
    """A single enveloped note."""
    raw = oscillator(wave, freq, duration)
    env = (envelope or ADSR()).render(len(raw))
    return raw * env * amplitude


def sweep(
    wave: WaveType,
    start_freq: float,
    end_freq: float,
    duration: float,
    amplitude: float = 0.5,
    envelope: Optional[ADSR] = None,
) -> Samples:
    """A note whose pitch glides linearly from start to end."""
    num_samples = int(SAMPLE_RATE * duration)
    freqs = np.linspace(start_freq, end_freq, num_samples)
    raw = oscillator(wave, freqs, duration)
    env = (envelope or ADSR()).render(num_samples)
    return raw * env * amplitude


def sequence(
    notes: Sequence[Optional[float]],
    step: float,
    wave: WaveType = WaveType.SQUARE,
    amplitude: float = 0.3,
    envelope: Optional[ADSR] = None,
) -> Samples:
    """Notes played back to back, ``None`` is a rest."""
    env = envelope or ADSR(attack=0.005, decay=0.05, sustain=0.6, release=0.05)
    parts = []
    for note in notes:
        if note is None:
            parts.append(np.zeros(int(SAMPLE_RATE * step)))
        else:
            parts.append(tone(wave, note, step, amplitude, env))
    return np.concatenate(parts) if parts else np.zeros(0)


def mix(*tracks: Samples) -> Samples:
    """Sum tracks of different lengths, padding the short ones."""
    if not tracks:
        return np.zeros(0)
    length = max(len(t) for t in tracks)
    out = np.zeros(length)
    for t in tracks:
        out[:len(t)] += t
    return np.clip(out, -1.0, 1.0)


def to_stereo_int16(samples: Samples) -> NDArray[np.int16]:
    """Convert mono floats to the (n, 2) int16 layout the mixer expects."""
    mono = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    return np.ascontiguousarray(np.column_stack((mono, mono)))
