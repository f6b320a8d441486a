from .waves import (
    CosineWave,
    SawtoothWave,
    SinusoidalWave,
    SquareWave,
    TriangularWave,
    Wave,
    WaveType,
    make_wave,
)
from .spectrum import FrequencyBin, FrequencySpectrum, Harmonic
from .results import (
    InterferenceNode,
    InterferenceResult,
    InterferenceType,
    NodeType,
    TimeSeries,
    WaveAnalysis,
)
from .profile import AnalysisProfile, validate_wave_parameters

__all__ = [
    "Wave",
    "WaveType",
    "SinusoidalWave",
    "CosineWave",
    "SquareWave",
    "TriangularWave",
    "SawtoothWave",
    "make_wave",
    "FrequencyBin",
    "FrequencySpectrum",
    "Harmonic",
    "InterferenceNode",
    "InterferenceResult",
    "InterferenceType",
    "NodeType",
    "TimeSeries",
    "WaveAnalysis",
    "AnalysisProfile",
    "validate_wave_parameters",
]
