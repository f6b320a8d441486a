"""End-to-end analysis of a wave collection.

:func:`run_wave_analysis` wraps the collection sampling, the Fourier engine and
the interference analyzer into a single call driven by an
:class:`~wave_analyzer.models.profile.AnalysisProfile`. Every step that cannot
produce a meaningful result records a warning in the returned report instead
of failing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from wave_analyzer.analysis.collection import WaveCollection
from wave_analyzer.analysis.fourier import calculate_thd, get_spectrum
from wave_analyzer.analysis.interference import (
    are_in_phase,
    are_out_of_phase,
    calculate_multi_wave_interference,
    calculate_two_wave_interference,
)
from wave_analyzer.models.profile import AnalysisProfile, validate_wave_parameters
from wave_analyzer.models.results import InterferenceResult, TimeSeries, WaveAnalysis
from wave_analyzer.models.spectrum import FrequencySpectrum
from wave_analyzer.models.waves import Wave

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaveReport:
    """Everything :func:`run_wave_analysis` derived from one collection.

    Attributes
    ----------
    profile:
        Configuration the report was produced with.
    series:
        Sampled superposition at position 0 with velocity/acceleration.
    stats:
        Time-domain statistics and phenomenon label.
    spectrum:
        Single-sided spectrum of ``series.amplitude`` (harmonics included).
    thd_percent:
        Total harmonic distortion of ``spectrum.harmonics``.
    beat_frequency:
        Smallest positive gap between member frequencies.
    interference:
        Interference classification of the members (two-wave form when the
        collection has exactly two members).
    phase_relation:
        "in phase", "out of phase" or "" for a two-member collection; "" otherwise.
    wavelengths:
        ``velocity / frequency`` per member with the profile velocity
        (inf for a zero frequency).
    warnings:
        Human-readable notes about out-of-range parameters or skipped steps.
    """

    profile: AnalysisProfile
    series: TimeSeries
    stats: WaveAnalysis
    spectrum: FrequencySpectrum
    thd_percent: float
    beat_frequency: float
    interference: InterferenceResult
    phase_relation: str = ""
    wavelengths: Tuple[float, ...] = ()
    warnings: Tuple[str, ...] = ()

    def summary(self) -> Dict[str, Any]:
        """Flat dict of the scalar results, suitable for ``pd.DataFrame([...])``."""
        return {
            "n_samples": self.series.n_samples,
            "max_amplitude": self.stats.max_amplitude,
            "min_amplitude": self.stats.min_amplitude,
            "rms_amplitude": self.stats.rms_amplitude,
            "energy": self.stats.energy,
            "dominant_frequency_hz": self.stats.frequency,
            "fundamental_hz": (
                self.spectrum.harmonics[0].frequency if self.spectrum.harmonics else 0.0
            ),
            "n_harmonics": len(self.spectrum.harmonics),
            "thd_percent": self.thd_percent,
            "beat_frequency_hz": self.beat_frequency,
            "phenomenon": self.stats.phenomenon,
            "interference": self.interference.type.value,
            "phase_relation": self.phase_relation,
            "n_warnings": len(self.warnings),
        }


def _phase_relation(wave1: Wave, wave2: Wave, tolerance: float) -> str:
    if are_in_phase(wave1, wave2, tolerance):
        return "in phase"
    if are_out_of_phase(wave1, wave2, tolerance):
        return "out of phase"
    return ""


def _wavelength(wave: Wave, velocity: float) -> float:
    if wave.frequency == 0.0:
        return float("inf")
    return wave.wavelength(velocity)


def run_wave_analysis(
    collection: WaveCollection,
    profile: Optional[AnalysisProfile] = None,
) -> WaveReport:
    """Sample, transform and classify ``collection``.

    Steps: parameter-range checks -> detailed time series -> statistics ->
    spectrum and harmonics -> THD -> interference and phase relation ->
    wavelengths. A two-member collection uses the two-wave classification
    with ``profile.interference_tolerance``; any other size uses the
    multi-wave form.

    Parameters
    ----------
    collection:
        Waves to analyse (borrowed, not modified).
    profile:
        Configuration; defaults to ``AnalysisProfile()``.
    """
    if profile is None:
        profile = AnalysisProfile()

    warnings: List[str] = []
    for wave in collection:
        warnings.extend(validate_wave_parameters(wave, profile))
    if len(collection) == 0:
        warnings.append("collection is empty; all results are zero")

    series = collection.generate_detailed_time_series(profile.duration, profile.sample_rate)
    if series.n_samples == 0:
        warnings.append(
            f"no samples for duration={profile.duration:g} s at {profile.sample_rate:g} Hz"
        )

    stats = collection.analyze_waves(
        series.amplitude,
        profile.sample_rate,
        beating_max_frequency=profile.beating_max_frequency,
        resonance_tolerance=profile.resonance_tolerance,
    )

    spectrum = get_spectrum(
        series.amplitude,
        profile.sample_rate,
        window=profile.window,
        harmonic_threshold=profile.harmonic_threshold,
        max_harmonic_order=profile.max_harmonic_order,
    )
    if not spectrum.is_empty and not spectrum.harmonics:
        warnings.append(f"no harmonic above threshold {profile.harmonic_threshold:g}")

    waves = collection.waves
    phase_relation = ""
    if len(waves) == 2:
        interference = calculate_two_wave_interference(
            waves[0],
            waves[1],
            0.0,
            profile.length,
            profile.num_points,
            tolerance=profile.interference_tolerance,
            node_threshold=profile.node_threshold,
        )
        phase_relation = _phase_relation(waves[0], waves[1], profile.phase_tolerance)
    else:
        interference = calculate_multi_wave_interference(
            waves,
            0.0,
            profile.length,
            profile.num_points,
            node_threshold=profile.node_threshold,
            resonance_tolerance=profile.resonance_tolerance,
            beating_max_frequency=profile.beating_max_frequency,
        )

    wavelengths = tuple(_wavelength(w, profile.velocity) for w in waves)

    for msg in warnings:
        logger.warning(msg)
    logger.info(
        "analysed %d waves: %d samples, %d harmonics, phenomenon=%s",
        len(collection),
        series.n_samples,
        len(spectrum.harmonics),
        stats.phenomenon,
    )

    return WaveReport(
        profile=profile,
        series=series,
        stats=stats,
        spectrum=spectrum,
        thd_percent=calculate_thd(spectrum.harmonics),
        beat_frequency=collection.calculate_beat_frequency(),
        interference=interference,
        phase_relation=phase_relation,
        wavelengths=wavelengths,
        warnings=tuple(warnings),
    )
