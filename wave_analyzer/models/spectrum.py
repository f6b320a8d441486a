from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class FrequencyBin:
    """One discrete frequency sample (phase in radians)."""

    frequency: float
    magnitude: float
    phase: float


@dataclass(frozen=True)
class Harmonic:
    """A spectral peak at an integer multiple of the fundamental.

    ``order`` is 1 for the fundamental, 2 for the second harmonic, etc.
    """

    frequency: float
    amplitude: float
    phase: float
    order: int


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=float)


@dataclass(frozen=True)
class FrequencySpectrum:
    """One-sided spectrum, DC through Nyquist inclusive.

    Attributes
    ----------
    frequencies, magnitudes, phases:
        Arrays of shape ``(fft_size // 2 + 1,)``. ``frequencies[i] = i * frequency_resolution``.
    sample_rate:
        Sampling rate of the analysed signal (Hz).
    fft_size:
        Padded FFT length the bins were derived from.
    frequency_resolution:
        ``sample_rate / fft_size``.
    max_frequency:
        Nyquist frequency, ``sample_rate / 2``.
    harmonics:
        Harmonics detected with the default threshold.

    An empty spectrum (empty input signal) has zero-length arrays and zero scalars.
    """

    frequencies: np.ndarray = field(default_factory=_empty)
    magnitudes: np.ndarray = field(default_factory=_empty)
    phases: np.ndarray = field(default_factory=_empty)
    sample_rate: float = 0.0
    fft_size: int = 0
    frequency_resolution: float = 0.0
    max_frequency: float = 0.0
    harmonics: Tuple[Harmonic, ...] = ()

    @property
    def n_bins(self) -> int:
        return int(self.frequencies.size)

    @property
    def is_empty(self) -> bool:
        return self.n_bins == 0

    @property
    def bins(self) -> Tuple[FrequencyBin, ...]:
        return tuple(
            FrequencyBin(float(f), float(m), float(p))
            for f, m, p in zip(self.frequencies, self.magnitudes, self.phases)
        )
