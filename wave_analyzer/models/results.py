from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np
import pandas as pd


class InterferenceType(Enum):
    CONSTRUCTIVE = "constructive"
    DESTRUCTIVE = "destructive"
    PARTIAL = "partial"
    NO_INTERFERENCE = "no_interference"


class NodeType(Enum):
    NODE = "node"  # local minimum of |sum|
    ANTINODE = "antinode"  # local maximum of |sum|


@dataclass(frozen=True)
class InterferenceNode:
    position: float
    amplitude: float
    type: NodeType


@dataclass(frozen=True)
class InterferenceResult:
    """Classification of a superposition sampled over ``[0, length]``.

    Attributes
    ----------
    type:
        Interference classification.
    amplitude:
        Peak absolute value of the sampled sum.
    phase:
        Phase shift between the first two waves in degrees, ``[0, 360)``.
    beat_frequency:
        ``|f1 - f2|`` of the first two waves (Hz).
    node_positions, antinode_positions:
        Spatial coordinates of detected nodes/antinodes.
    description:
        Human-readable summary.
    """

    type: InterferenceType
    amplitude: float = 0.0
    phase: float = 0.0
    beat_frequency: float = 0.0
    node_positions: Tuple[float, ...] = ()
    antinode_positions: Tuple[float, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class WaveAnalysis:
    """Statistics of a sampled superposition plus the detected phenomenon."""

    max_amplitude: float
    min_amplitude: float
    rms_amplitude: float
    frequency: float
    period: float
    energy: float
    phenomenon: str


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=float)


@dataclass(frozen=True)
class TimeSeries:
    """Sampled superposition with finite-difference derivatives.

    All arrays have shape ``(n_samples,)``. ``velocity`` is 0 at the first
    sample, ``acceleration`` is 0 at the first two samples.
    """

    time: np.ndarray = field(default_factory=_empty)
    amplitude: np.ndarray = field(default_factory=_empty)
    velocity: np.ndarray = field(default_factory=_empty)
    acceleration: np.ndarray = field(default_factory=_empty)

    @property
    def n_samples(self) -> int:
        return int(self.time.size)

    def to_frame(self) -> pd.DataFrame:
        """Columnar view, e.g. for CSV export by the caller."""
        return pd.DataFrame(
            {
                "time_s": self.time,
                "amplitude": self.amplitude,
                "velocity": self.velocity,
                "acceleration": self.acceleration,
            }
        )
