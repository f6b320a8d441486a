"""Tests for the radix-2 Fourier engine."""

from __future__ import annotations

import numpy as np
import pytest

from wave_analyzer.analysis.collection import WaveCollection
from wave_analyzer.analysis.fourier import (
    apply_window,
    band_pass_filter,
    calculate_thd,
    fft,
    find_dominant_frequency,
    find_harmonics,
    get_frequency_axis,
    get_spectrum,
    harmonic_table,
    high_pass_filter,
    ifft,
    low_pass_filter,
    next_power_of_two,
)
from wave_analyzer.models.spectrum import FrequencySpectrum, Harmonic
from wave_analyzer.models.waves import SinusoidalWave


def _harmonic_signal() -> np.ndarray:
    """1 Hz (A=2) + 2 Hz (A=1) + 4 Hz (A=0.5), 4 s at 256 Hz."""
    coll = WaveCollection()
    coll.add(SinusoidalWave(2.0, 1.0, 0.0))
    coll.add(SinusoidalWave(1.0, 2.0, 0.0))
    coll.add(SinusoidalWave(0.5, 4.0, 0.0))
    return coll.generate_time_series(4.0, 256.0)


def _two_tone(rate: float = 128.0, n: int = 128):
    t = np.arange(n) / rate
    low = np.sin(2 * np.pi * 2.0 * t)
    high = np.sin(2 * np.pi * 20.0 * t)
    return low, high


# =====================================================================
#  Transforms
# =====================================================================

@pytest.mark.parametrize("n, expected", [(0, 1), (1, 1), (2, 2), (3, 4), (1000, 1024), (1024, 1024)])
def test_next_power_of_two(n, expected) -> None:
    assert next_power_of_two(n) == expected


def test_fft_pads_and_matches_reference() -> None:
    rng = np.random.default_rng(3)
    x = rng.normal(size=100)
    X = fft(x)
    assert X.shape == (128,)

    padded = np.zeros(128)
    padded[:100] = x
    assert np.allclose(X, np.fft.fft(padded), atol=1e-9)


def test_fft_degenerate_sizes() -> None:
    assert np.allclose(fft([]), [0.0])
    assert np.allclose(fft([3.5]), [3.5])


def test_ifft_round_trip() -> None:
    rng = np.random.default_rng(11)
    x = rng.normal(size=300)
    y = ifft(fft(x))
    assert y.shape == (512,)

    padded = np.zeros(512)
    padded[:300] = x
    assert np.allclose(y.real, padded, rtol=1e-9, atol=1e-9)
    assert np.allclose(y.imag, 0.0, atol=1e-9)


def test_ifft_requires_power_of_two() -> None:
    with pytest.raises(ValueError, match="power-of-two"):
        ifft(np.ones(3, dtype=complex))


def test_fft_rejects_2d_input() -> None:
    with pytest.raises(ValueError, match="1D"):
        fft(np.ones((2, 4)))


# =====================================================================
#  Windows and axes
# =====================================================================

def test_apply_window_formulas() -> None:
    n = 9
    i = np.arange(n)
    arg = 2 * np.pi * i / (n - 1)

    hann = np.ones(n)
    apply_window(hann, "hanning")
    assert np.allclose(hann, 0.5 - 0.5 * np.cos(arg))

    hamming = np.ones(n)
    apply_window(hamming, "hamming")
    assert np.allclose(hamming, 0.54 - 0.46 * np.cos(arg))

    blackman = np.ones(n)
    apply_window(blackman, "blackman")
    assert np.allclose(blackman, 0.42 - 0.5 * np.cos(arg) + 0.08 * np.cos(2 * arg))

    rect = np.ones(n)
    apply_window(rect, "rectangular")
    assert np.all(rect == 1.0)


def test_apply_window_on_list_writes_back() -> None:
    samples = [1.0] * 9
    out = apply_window(samples, "hann")
    expected = np.hanning(9)
    assert np.allclose(out, expected)
    assert np.allclose(samples, expected)


def test_apply_window_on_integer_array() -> None:
    samples = np.full(9, 4, dtype=int)
    out = apply_window(samples, "hamming")
    assert out.dtype == float
    assert np.allclose(out, 4.0 * np.hamming(9))
    assert samples.dtype == int
    assert np.array_equal(samples, (4.0 * np.hamming(9)).astype(int))


def test_apply_window_returns_signal_for_unknown_name() -> None:
    out = apply_window((1, 2, 3), "rectangular")
    assert np.allclose(out, [1.0, 2.0, 3.0])


def test_frequency_axis() -> None:
    assert np.allclose(get_frequency_axis(8, 8.0), [0.0, 1.0, 2.0, 3.0, 4.0])
    assert get_frequency_axis(0, 8.0).size == 0


# =====================================================================
#  Spectrum
# =====================================================================

def test_spectrum_bin_count_and_axis() -> None:
    x = np.sin(np.arange(1000) * 0.1)
    spectrum = get_spectrum(x, 500.0)
    assert spectrum.fft_size == 1024
    assert spectrum.n_bins == 1024 // 2 + 1
    assert spectrum.frequencies[0] == 0.0
    assert spectrum.frequencies[-1] == pytest.approx(250.0)
    assert spectrum.max_frequency == 250.0
    assert spectrum.frequency_resolution == pytest.approx(500.0 / 1024)
    assert len(spectrum.bins) == spectrum.n_bins


def test_empty_spectrum() -> None:
    spectrum = get_spectrum([], 100.0)
    assert spectrum.is_empty
    assert spectrum.sample_rate == 0.0
    assert spectrum.harmonics == ()
    assert find_harmonics(spectrum) == []
    assert find_dominant_frequency(spectrum) == 0.0


def test_single_tone_magnitude_and_dominant_frequency() -> None:
    rate = 128.0
    t = np.arange(256) / rate
    spectrum = get_spectrum(np.sin(2 * np.pi * 8.0 * t), rate)
    k = int(np.argmax(spectrum.magnitudes))
    assert spectrum.frequencies[k] == 8.0
    # Hann coherent gain halves the single-sided amplitude
    assert spectrum.magnitudes[k] == pytest.approx(0.5, rel=0.02)
    assert find_dominant_frequency(spectrum) == 8.0


def test_dc_bin_uses_single_scaling() -> None:
    spectrum = get_spectrum(np.full(64, 2.0), 64.0, window="rectangular")
    assert spectrum.magnitudes[0] == pytest.approx(2.0)
    assert np.allclose(spectrum.magnitudes[1:], 0.0, atol=1e-12)


def test_harmonics_of_composite_signal() -> None:
    spectrum = get_spectrum(_harmonic_signal(), 256.0)
    harmonics = spectrum.harmonics

    assert [h.order for h in harmonics] == [1, 2, 4]
    assert [h.frequency for h in harmonics] == [1.0, 2.0, 4.0]
    amps = [h.amplitude for h in harmonics]
    assert amps[0] > amps[1] > amps[2]
    assert amps[1] / amps[0] == pytest.approx(0.5, rel=0.05)
    assert amps[2] / amps[0] == pytest.approx(0.25, rel=0.05)

    thd = calculate_thd(harmonics)
    assert 0.0 < thd < 100.0
    assert thd == pytest.approx(100 * np.sqrt(0.5**2 + 0.25**2), rel=0.05)


def test_find_harmonics_threshold_aborts() -> None:
    spectrum = get_spectrum(_harmonic_signal(), 256.0)
    assert find_harmonics(spectrum, threshold=10.0) == []


def test_find_harmonics_respects_max_order() -> None:
    spectrum = get_spectrum(_harmonic_signal(), 256.0)
    assert [h.order for h in find_harmonics(spectrum, max_order=2)] == [1, 2]


def test_find_harmonics_on_silent_spectrum() -> None:
    spectrum = get_spectrum(np.zeros(32), 32.0)
    assert spectrum.harmonics == ()
    assert find_dominant_frequency(spectrum) == 0.0


def test_thd_edge_cases() -> None:
    assert calculate_thd([]) == 0.0
    assert calculate_thd([Harmonic(2.0, 1.0, 0.0, 2)]) == 0.0
    h = [Harmonic(1.0, 1.0, 0.0, 1), Harmonic(2.0, 0.5, 0.0, 2)]
    assert calculate_thd(h) == pytest.approx(50.0)


def test_harmonic_table() -> None:
    df = harmonic_table([Harmonic(1.0, 1.0, 0.1, 1), Harmonic(3.0, 0.2, 0.3, 3)])
    assert list(df.columns) == ["order", "frequency_hz", "amplitude", "phase_rad", "phase_deg"]
    assert df["order"].tolist() == [1, 3]
    assert df["phase_deg"].tolist() == pytest.approx([0.1 * 180.0 / np.pi, 0.3 * 180.0 / np.pi])
    assert harmonic_table([]).empty


def test_default_spectrum_dataclass() -> None:
    spectrum = FrequencySpectrum()
    assert spectrum.n_bins == 0
    assert spectrum.bins == ()


def test_spectrum_bins_mirror_arrays() -> None:
    spectrum = get_spectrum(np.sin(np.arange(16) * 0.5), 16.0)
    bins = spectrum.bins
    assert bins == spectrum.bins
    assert [b.frequency for b in bins] == spectrum.frequencies.tolist()
    assert [b.magnitude for b in bins] == spectrum.magnitudes.tolist()
    assert [b.phase for b in bins] == spectrum.phases.tolist()


# =====================================================================
#  Filters
# =====================================================================

def test_low_pass_keeps_low_tone() -> None:
    low, high = _two_tone()
    out = low_pass_filter(low + high, 10.0, 128.0)
    assert out.shape == (128,)
    assert np.allclose(out, low, atol=1e-9)


def test_high_pass_keeps_high_tone() -> None:
    low, high = _two_tone()
    out = high_pass_filter(low + high, 10.0, 128.0)
    assert np.allclose(out, high, atol=1e-9)


def test_band_pass_selects_band() -> None:
    low, high = _two_tone()
    assert np.allclose(band_pass_filter(low + high, 15.0, 25.0, 128.0), high, atol=1e-9)
    assert np.allclose(band_pass_filter(low + high, 1.0, 3.0, 128.0), low, atol=1e-9)


def test_filters_remove_dc() -> None:
    x = np.full(16, 3.0)
    assert np.allclose(high_pass_filter(x, 0.0, 16.0), 0.0, atol=1e-12)
    assert np.allclose(low_pass_filter(x, 0.0, 16.0), 0.0, atol=1e-12)
    assert np.allclose(low_pass_filter(x, 2.0, 16.0), 3.0)


def test_filter_output_uses_padded_length() -> None:
    out = low_pass_filter(np.ones(100), 5.0, 100.0)
    assert out.shape == (128,)
