"""Analysis profile -- bundles all analysis-relevant configuration.

An AnalysisProfile groups every tunable default of the wave pipeline into
one frozen dataclass. It can be:

- Constructed with defaults and overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple

from wave_analyzer import constants
from wave_analyzer.models.waves import Wave


@dataclass(frozen=True)
class AnalysisProfile:
    """Frozen configuration for :func:`~wave_analyzer.analysis.pipeline.run_wave_analysis`.

    Sampling
    --------
    sample_rate : float
        Samples per second of the generated time series.
    duration : float
        Time series length in seconds.
    velocity : float
        Propagation velocity used to derive the member wavelengths.
    length, num_points : float, int
        Spatial domain ``[0, length]`` and its number of sample points
        (interference analysis).

    Spectrum
    --------
    window : str
        Spectrum window, any name accepted by
        :func:`~wave_analyzer.analysis.fourier.apply_window`.
    harmonic_threshold : float
        Minimum normalised magnitude of an accepted harmonic.
    max_harmonic_order : int
        Highest harmonic order searched.

    Interference
    ------------
    interference_tolerance : float
        Amplitude tolerance of the constructive/destructive classification
        (applied when the collection has exactly two members).
    node_threshold : float
        Amplitude separating nodes from antinodes.
    phase_tolerance : float
        Degrees tolerance for the in-phase / out-of-phase relation of a
        two-member collection.
    resonance_tolerance : float
        Hz tolerance for resonance detection.
    beating_max_frequency : float
        Upper bound (exclusive) of a beat frequency reported as beating.

    Parameter ranges
    ----------------
    amplitude_range, frequency_range, phase_range : (float, float)
        Conventional ranges; waves outside are flagged, not rejected.
    """

    sample_rate: float = constants.DEFAULT_SAMPLE_RATE
    duration: float = constants.DEFAULT_DURATION
    velocity: float = 1.0
    length: float = 10.0
    num_points: int = 1000

    window: str = "hann"
    harmonic_threshold: float = 0.1
    max_harmonic_order: int = 10

    interference_tolerance: float = 0.1
    node_threshold: float = 0.1
    phase_tolerance: float = 0.1
    resonance_tolerance: float = 0.01
    beating_max_frequency: float = 2.0

    amplitude_range: Tuple[float, float] = (constants.MIN_AMPLITUDE, constants.MAX_AMPLITUDE)
    frequency_range: Tuple[float, float] = (constants.MIN_FREQUENCY, constants.MAX_FREQUENCY)
    phase_range: Tuple[float, float] = (constants.MIN_PHASE, constants.MAX_PHASE)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (tuples become lists)."""
        d = asdict(self)
        for key in ("amplitude_range", "frequency_range", "phase_range"):
            d[key] = list(d[key])
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> AnalysisProfile:
        """Reconstruct from a dict (e.g. loaded from JSON). Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        d = {k: v for k, v in d.items() if k in known}
        for key in ("amplitude_range", "frequency_range", "phase_range"):
            if key in d and not isinstance(d[key], tuple):
                d[key] = tuple(d[key])
        return cls(**d)


def validate_wave_parameters(wave: Wave, profile: Optional[AnalysisProfile] = None) -> Tuple[str, ...]:
    """Return warnings for parameters outside the profile's conventional ranges.

    Never raises; an empty tuple means every parameter is in range.
    """
    if profile is None:
        profile = AnalysisProfile()

    warnings = []
    checks = (
        ("amplitude", wave.amplitude, profile.amplitude_range),
        ("frequency", wave.frequency, profile.frequency_range),
        ("phase", wave.phase, profile.phase_range),
    )
    for name, value, (lo, hi) in checks:
        if not (lo <= value <= hi):
            warnings.append(
                f"{wave.wave_type.value} wave {name}={value:g} outside [{lo:g}, {hi:g}]"
            )
    return tuple(warnings)
