"""Wave generators.

Five closed variants share one contract: ``evaluate(x, t)`` plus amplitude /
frequency / phase accessors and the derived quantities (period, wavelength,
angular frequency, wave number, energy).

All variants are functions of time only. The position argument ``x`` is
accepted so that callers can sample over a spatial grid; it only sets the
shape of the output.

Phase is expressed in degrees and is not normalised here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Type, Union

import numpy as np

from wave_analyzer.constants import DEG_TO_RAD, TWO_PI


class WaveType(Enum):
    SINUSOIDAL = "sinusoidal"
    COSINE = "cosine"
    SQUARE = "square"
    TRIANGULAR = "triangular"
    SAWTOOTH = "sawtooth"


def _to_output(value):
    """Return a Python float for scalar results, the array otherwise."""
    arr = np.asarray(value, dtype=float)
    if arr.ndim == 0:
        return float(arr)
    return arr


def _fractional_cycle(frequency: float, phase_deg: float, t: np.ndarray) -> np.ndarray:
    """Fractional part in [0, 1) of ``f*t + phase/360``."""
    u = frequency * t + phase_deg / 360.0
    return u - np.floor(u)


@dataclass
class Wave(ABC):
    """Common base of the five wave variants.

    Attributes
    ----------
    amplitude:
        Peak amplitude. Any sign is accepted, positive by convention.
    frequency:
        Frequency in Hz (expected > 0).
    phase:
        Phase offset in degrees.
    """

    amplitude: float = 1.0
    frequency: float = 1.0
    phase: float = 0.0

    wave_type: ClassVar[WaveType]

    def evaluate(self, x, t):
        """Evaluate the wave at position(s) ``x`` and time(s) ``t``.

        ``x`` and ``t`` broadcast against each other; scalar inputs return a float.
        """
        _, tt = np.broadcast_arrays(np.asarray(x, dtype=float), np.asarray(t, dtype=float))
        return _to_output(self._evaluate_time(tt))

    @abstractmethod
    def _evaluate_time(self, t: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def equation(self) -> str:
        """Human-readable equation, e.g. ``y = 2 * sin(2π * 1 * t + 0°)``."""

    def set_parameters(self, amplitude: float, frequency: float, phase: float) -> None:
        self.amplitude = amplitude
        self.frequency = frequency
        self.phase = phase

    def _argument(self, t: np.ndarray) -> np.ndarray:
        return TWO_PI * self.frequency * t + self.phase * DEG_TO_RAD

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    # Zero frequency/velocity yields inf or NaN with a RuntimeWarning; callers check first.

    @property
    def period(self) -> float:
        return float(np.divide(1.0, self.frequency))

    def wavelength(self, velocity: float = 1.0) -> float:
        return float(np.divide(velocity, self.frequency))

    @property
    def angular_frequency(self) -> float:
        return TWO_PI * self.frequency

    def wave_number(self, velocity: float = 1.0) -> float:
        return float(np.divide(TWO_PI, self.wavelength(velocity)))

    @property
    def energy(self) -> float:
        return 0.5 * self.amplitude * self.amplitude


@dataclass
class SinusoidalWave(Wave):
    wave_type: ClassVar[WaveType] = WaveType.SINUSOIDAL

    def _evaluate_time(self, t: np.ndarray) -> np.ndarray:
        return self.amplitude * np.sin(self._argument(t))

    def equation(self) -> str:
        return f"y = {self.amplitude:g} * sin(2π * {self.frequency:g} * t + {self.phase:g}°)"


@dataclass
class CosineWave(Wave):
    wave_type: ClassVar[WaveType] = WaveType.COSINE

    def _evaluate_time(self, t: np.ndarray) -> np.ndarray:
        return self.amplitude * np.cos(self._argument(t))

    def equation(self) -> str:
        return f"y = {self.amplitude:g} * cos(2π * {self.frequency:g} * t + {self.phase:g}°)"


@dataclass
class SquareWave(Wave):
    """Sign of the matching sine; sin == 0 maps to +1."""

    wave_type: ClassVar[WaveType] = WaveType.SQUARE

    def _evaluate_time(self, t: np.ndarray) -> np.ndarray:
        return self.amplitude * np.where(np.sin(self._argument(t)) >= 0.0, 1.0, -1.0)

    def equation(self) -> str:
        return f"y = {self.amplitude:g} * sign(sin(2π * {self.frequency:g} * t + {self.phase:g}°))"


@dataclass
class TriangularWave(Wave):
    """Ramp 0 -> A -> -A -> 0 over one period (starts at 0, peaks at r = 0.25)."""

    wave_type: ClassVar[WaveType] = WaveType.TRIANGULAR

    def _evaluate_time(self, t: np.ndarray) -> np.ndarray:
        r = _fractional_cycle(self.frequency, self.phase, t)
        shape = np.where(r < 0.25, 4.0 * r, np.where(r < 0.75, 2.0 - 4.0 * r, 4.0 * r - 4.0))
        return self.amplitude * shape

    def equation(self) -> str:
        return f"y = {self.amplitude:g} * triangular({self.frequency:g} * t + {self.phase:g}°)"


@dataclass
class SawtoothWave(Wave):
    """Linear ramp from -A to A each period."""

    wave_type: ClassVar[WaveType] = WaveType.SAWTOOTH

    def _evaluate_time(self, t: np.ndarray) -> np.ndarray:
        r = _fractional_cycle(self.frequency, self.phase, t)
        return self.amplitude * (2.0 * r - 1.0)

    def equation(self) -> str:
        return f"y = {self.amplitude:g} * sawtooth({self.frequency:g} * t + {self.phase:g}°)"


WAVE_CLASSES: Dict[WaveType, Type[Wave]] = {
    WaveType.SINUSOIDAL: SinusoidalWave,
    WaveType.COSINE: CosineWave,
    WaveType.SQUARE: SquareWave,
    WaveType.TRIANGULAR: TriangularWave,
    WaveType.SAWTOOTH: SawtoothWave,
}


def make_wave(
    kind: Union[WaveType, str],
    amplitude: float = 1.0,
    frequency: float = 1.0,
    phase: float = 0.0,
) -> Wave:
    """Build a wave from its variant tag.

    Parameters
    ----------
    kind:
        A :class:`WaveType` or its value (case-insensitive), e.g. ``"square"``.
    amplitude, frequency, phase:
        Wave parameters (phase in degrees).
    """
    if not isinstance(kind, WaveType):
        try:
            kind = WaveType(str(kind).strip().lower())
        except ValueError:
            valid = ", ".join(wt.value for wt in WaveType)
            raise ValueError(f"Unknown wave kind {kind!r}; expected one of: {valid}") from None
    return WAVE_CLASSES[kind](amplitude=amplitude, frequency=frequency, phase=phase)
