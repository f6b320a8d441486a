"""Radix-2 Fourier engine: transforms, spectra, harmonics and FFT-domain filters.

Normalisation and conventions
-----------------------------
- ``fft`` zero-pads real input on the right to the next power of two and uses
  the forward twiddle ``w = exp(-2*pi*i*k/n)``.
- ``ifft`` is the conjugate-trick inverse (``conj(fft(conj(X))) / n``) and
  requires a power-of-two length.
- Spectrum magnitudes are single-sided: bins strictly between DC and Nyquist
  are scaled by ``2/N``, DC and Nyquist by ``1/N``.
- Filters work at the padded FFT resolution and return ``N`` samples.

Functions
---------
next_power_of_two, fft, ifft
    Transform primitives.
apply_window
    Hann / Hamming / Blackman windowing (also written back in place).
get_spectrum, get_frequency_axis
    One-sided spectrum of a real signal.
find_harmonics, find_dominant_frequency, calculate_thd, harmonic_table
    Spectral peak analysis.
low_pass_filter, high_pass_filter, band_pass_filter
    Brick-wall filters applied in the frequency domain.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

import numpy as np
import pandas as pd

from wave_analyzer.constants import RAD_TO_DEG
from wave_analyzer.models.spectrum import FrequencySpectrum, Harmonic

logger = logging.getLogger(__name__)

DEFAULT_HARMONIC_THRESHOLD = 0.1
MAX_HARMONIC_ORDER = 10

_WINDOWS = {
    "hann": np.hanning,
    "hanning": np.hanning,
    "hamming": np.hamming,
    "blackman": np.blackman,
}


def _as_signal(signal: Sequence[float]) -> np.ndarray:
    x = np.asarray(signal, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1D, got shape {x.shape}")
    return x


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    power = 1
    while power < n:
        power *= 2
    return power


def _fft_recursive(x: np.ndarray) -> np.ndarray:
    n = x.size
    if n <= 1:
        return x.copy()

    even = _fft_recursive(x[0::2])
    odd = _fft_recursive(x[1::2])

    k = np.arange(n // 2)
    angle = -2.0 * np.pi * k / n
    w = np.cos(angle) + 1j * np.sin(angle)
    t = w * odd

    out = np.empty(n, dtype=complex)
    out[: n // 2] = even + t
    out[n // 2 :] = even - t
    return out


def fft(signal: Sequence[float]) -> np.ndarray:
    """Forward transform of a real signal, zero-padded to a power of two.

    Returns
    -------
    ndarray of complex, shape ``(next_power_of_two(len(signal)),)``
    """
    x = _as_signal(signal)
    n = next_power_of_two(x.size)
    padded = np.zeros(n, dtype=complex)
    padded[: x.size] = x
    return _fft_recursive(padded)


def ifft(spectrum: Sequence[complex]) -> np.ndarray:
    """Inverse transform via the conjugate trick; output length equals input length.

    Raises
    ------
    ValueError
        If the length is not a power of two (pair only with spectra from :func:`fft`).
    """
    X = np.asarray(spectrum, dtype=complex)
    if X.ndim != 1:
        raise ValueError(f"spectrum must be 1D, got shape {X.shape}")
    n = X.size
    if n == 0:
        return np.zeros(0, dtype=complex)
    if n & (n - 1):
        raise ValueError(f"ifft requires a power-of-two length, got {n}")
    return np.conj(_fft_recursive(np.conj(X))) / float(n)


def apply_window(signal: Sequence[float], window_type: str = "hann") -> np.ndarray:
    """Multiply ``signal`` by the named window and return the float result.

    Lists and ndarrays are also updated in place (an integer ndarray keeps
    its dtype, so the written-back values are truncated).

    Hann: ``0.5 - 0.5*cos(2*pi*i/(n-1))``; Hamming: ``0.54 - 0.46*cos(...)``;
    Blackman: ``0.42 - 0.5*cos(2*pi*i/(n-1)) + 0.08*cos(4*pi*i/(n-1))``.
    Unknown names (e.g. ``"rectangular"``) leave the signal unchanged.
    A single-sample window is 1.
    """
    x = _as_signal(signal)
    make = _WINDOWS.get(str(window_type).lower())
    if make is None:
        return x
    windowed = x * make(x.size)
    if isinstance(signal, (list, np.ndarray)):
        signal[:] = windowed
    return windowed


def get_frequency_axis(fft_size: int, sample_rate: float) -> np.ndarray:
    """Bin frequencies ``i * sample_rate / fft_size`` for ``i = 0..fft_size//2``."""
    if fft_size <= 0:
        return np.zeros(0, dtype=float)
    df = sample_rate / fft_size
    return np.arange(fft_size // 2 + 1, dtype=float) * df


def get_spectrum(
    signal: Sequence[float],
    sample_rate: float,
    *,
    window: str = "hann",
    harmonic_threshold: float = DEFAULT_HARMONIC_THRESHOLD,
    max_harmonic_order: int = MAX_HARMONIC_ORDER,
) -> FrequencySpectrum:
    """Single-sided spectrum of a windowed copy of ``signal``.

    Parameters
    ----------
    signal:
        Real samples. Empty input returns an empty :class:`FrequencySpectrum`.
    sample_rate:
        Sampling rate in Hz.
    window:
        Window applied to the copy before the transform (Hann by default).
    harmonic_threshold, max_harmonic_order:
        Passed to :func:`find_harmonics` to populate ``spectrum.harmonics``.
    """
    x = _as_signal(signal)
    if x.size == 0:
        return FrequencySpectrum()

    X = fft(apply_window(x.copy(), window))

    N = X.size
    n_bins = N // 2 + 1
    mags = np.abs(X[:n_bins])
    phases = np.angle(X[:n_bins])

    scale = np.full(n_bins, 1.0 / N)
    scale[1 : N // 2] = 2.0 / N
    mags = mags * scale

    logger.debug("spectrum: %d samples padded to %d, %d bins", x.size, N, n_bins)

    spectrum = FrequencySpectrum(
        frequencies=get_frequency_axis(N, sample_rate),
        magnitudes=mags,
        phases=phases,
        sample_rate=float(sample_rate),
        fft_size=N,
        frequency_resolution=sample_rate / N,
        max_frequency=sample_rate / 2.0,
    )
    harmonics = find_harmonics(spectrum, harmonic_threshold, max_order=max_harmonic_order)
    return replace(spectrum, harmonics=tuple(harmonics))


def _strongest_non_dc(spectrum: FrequencySpectrum) -> int:
    """Index of the largest-magnitude bin above DC, or 0 if none is positive."""
    mags = spectrum.magnitudes
    if mags.size < 2:
        return 0
    k = int(np.argmax(mags[1:])) + 1
    if not mags[k] > 0.0:
        return 0
    return k


def find_harmonics(
    spectrum: FrequencySpectrum,
    threshold: float = DEFAULT_HARMONIC_THRESHOLD,
    *,
    max_order: int = MAX_HARMONIC_ORDER,
) -> List[Harmonic]:
    """Locate the fundamental and its integer multiples.

    The fundamental is the strongest bin above DC. For each order up to
    ``max_order`` (while ``order * f0 <= max_frequency``) the closest bin to the
    target frequency is accepted if it lies within two bins of the target and
    its magnitude is at least ``threshold``.

    Returns
    -------
    list of Harmonic
        In increasing order (and hence frequency); empty when the fundamental is
        below ``threshold``.
    """
    if spectrum.is_empty:
        return []

    k0 = _strongest_non_dc(spectrum)
    f0 = float(spectrum.frequencies[k0])
    if f0 == 0.0 or spectrum.magnitudes[k0] < threshold:
        return []

    freqs = spectrum.frequencies
    tol_hz = 2.0 * spectrum.frequency_resolution

    harmonics: List[Harmonic] = []
    for order in range(1, max_order + 1):
        target = order * f0
        if target > spectrum.max_frequency:
            break
        dist = np.abs(freqs - target)
        k = int(np.argmin(dist))
        if dist[k] <= tol_hz and spectrum.magnitudes[k] >= threshold:
            harmonics.append(
                Harmonic(
                    frequency=float(freqs[k]),
                    amplitude=float(spectrum.magnitudes[k]),
                    phase=float(spectrum.phases[k]),
                    order=order,
                )
            )
    return harmonics


def find_dominant_frequency(spectrum: FrequencySpectrum) -> float:
    """Frequency of the strongest bin above DC (0 for an empty spectrum)."""
    if spectrum.is_empty:
        return 0.0
    return float(spectrum.frequencies[_strongest_non_dc(spectrum)])


def calculate_thd(harmonics: Sequence[Harmonic]) -> float:
    """Total harmonic distortion in percent: ``sqrt(sum P_n>1 / P_1) * 100``."""
    fundamental_power = 0.0
    harmonic_power = 0.0
    for h in harmonics:
        power = h.amplitude * h.amplitude
        if h.order == 1:
            fundamental_power = power
        else:
            harmonic_power += power
    if fundamental_power == 0.0:
        return 0.0
    return float(np.sqrt(harmonic_power / fundamental_power) * 100.0)


def harmonic_table(harmonics: Sequence[Harmonic]) -> pd.DataFrame:
    """One row per harmonic: ``order, frequency_hz, amplitude, phase_rad, phase_deg``."""
    rows = [
        {
            "order": h.order,
            "frequency_hz": h.frequency,
            "amplitude": h.amplitude,
            "phase_rad": h.phase,
            "phase_deg": h.phase * RAD_TO_DEG,
        }
        for h in harmonics
    ]
    return pd.DataFrame(rows, columns=["order", "frequency_hz", "amplitude", "phase_rad", "phase_deg"])


# =====================================================================
#  Frequency-domain filters
# =====================================================================

def _cutoff_bin(freq: float, fft_size: int, sample_rate: float) -> int:
    return max(int(np.floor(freq * fft_size / sample_rate)), 0)


def _folded_index(n: int) -> np.ndarray:
    """Distance of each bin to DC on the circular spectrum: ``min(i, n - i)``."""
    i = np.arange(n)
    return np.minimum(i, n - i)


def _filter(signal: Sequence[float], keep_fn, label: str) -> np.ndarray:
    X = fft(signal)
    keep = keep_fn(_folded_index(X.size), X.size)
    logger.debug("%s: fft_size=%d, kept %d/%d bins", label, X.size, int(np.count_nonzero(keep)), X.size)
    X[~keep] = 0.0
    return np.real(ifft(X))


def low_pass_filter(signal: Sequence[float], cutoff_freq: float, sample_rate: float) -> np.ndarray:
    """Keep bins below the cutoff bin (and their mirror images).

    The cutoff bin is ``floor(cutoff_freq * N / sample_rate)`` with ``N`` the
    padded FFT length; the result has ``N`` samples.
    """
    def keep(folded, n):
        return folded < _cutoff_bin(cutoff_freq, n, sample_rate)

    return _filter(signal, keep, "low_pass")


def high_pass_filter(signal: Sequence[float], cutoff_freq: float, sample_rate: float) -> np.ndarray:
    """Remove DC through the cutoff bin inclusive (and mirror images)."""
    def keep(folded, n):
        return folded > _cutoff_bin(cutoff_freq, n, sample_rate)

    return _filter(signal, keep, "high_pass")


def band_pass_filter(
    signal: Sequence[float], low_freq: float, high_freq: float, sample_rate: float
) -> np.ndarray:
    """Keep bins in ``[low_bin, high_bin]`` and their mirror images."""
    def keep(folded, n):
        lo = _cutoff_bin(low_freq, n, sample_rate)
        hi = _cutoff_bin(high_freq, n, sample_rate)
        return (folded >= lo) & (folded <= hi)

    return _filter(signal, keep, "band_pass")
