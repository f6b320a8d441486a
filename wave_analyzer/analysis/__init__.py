"""Analysis package.

Design principle:
  - Wave generators (``wave_analyzer.models``) are pure functions of time.
  - :class:`WaveCollection` owns waves and samples their superposition.
  - The Fourier engine consumes raw sample buffers, independent of any collection.
  - The interference analyzer borrows waves directly and samples them over space.
"""

from .collection import WaveCollection
from .fourier import (
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
from .interference import (
    are_in_phase,
    are_out_of_phase,
    calculate_beat_envelope,
    calculate_beat_frequency,
    calculate_beat_period,
    calculate_multi_wave_interference,
    calculate_phase_shift,
    calculate_resonance_amplification,
    calculate_rms_amplitude,
    calculate_single_slit_diffraction,
    calculate_standing_wave,
    calculate_total_amplitude,
    calculate_two_wave_interference,
    calculate_youngs_double_slit_pattern,
    classify_interference,
    describe_interference,
    detect_resonance,
    find_interference_nodes,
)
from .pipeline import WaveReport, run_wave_analysis

__all__ = [
    "WaveCollection",
    "next_power_of_two",
    "fft",
    "ifft",
    "apply_window",
    "get_spectrum",
    "get_frequency_axis",
    "find_harmonics",
    "find_dominant_frequency",
    "calculate_thd",
    "harmonic_table",
    "low_pass_filter",
    "high_pass_filter",
    "band_pass_filter",
    "calculate_total_amplitude",
    "classify_interference",
    "describe_interference",
    "calculate_two_wave_interference",
    "calculate_multi_wave_interference",
    "calculate_beat_frequency",
    "calculate_beat_period",
    "calculate_beat_envelope",
    "find_interference_nodes",
    "calculate_standing_wave",
    "calculate_phase_shift",
    "are_in_phase",
    "are_out_of_phase",
    "detect_resonance",
    "calculate_resonance_amplification",
    "calculate_rms_amplitude",
    "calculate_youngs_double_slit_pattern",
    "calculate_single_slit_diffraction",
    "WaveReport",
    "run_wave_analysis",
]
