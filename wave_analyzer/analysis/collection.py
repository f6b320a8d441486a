"""Owned wave collection and superposition sampling.

Ownership
---------
A :class:`WaveCollection` owns the waves handed to :meth:`WaveCollection.add`.
Callers must not keep mutating a wave after adding it, except through the
reference returned by :meth:`WaveCollection.get_wave`. Such a reference (and any
index) is invalidated by :meth:`~WaveCollection.remove` and
:meth:`~WaveCollection.clear`.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from wave_analyzer.models.results import TimeSeries, WaveAnalysis
from wave_analyzer.models.waves import Wave, WaveType, make_wave


WaveRow = Tuple[Union[WaveType, str], float, float, float]


def _n_samples(extent: float, sample_rate: float) -> int:
    """``floor(extent * sample_rate)``, never negative."""
    return max(int(extent * sample_rate), 0)


class WaveCollection:
    """Ordered set of owned waves with a propagation velocity and a time cursor.

    Parameters
    ----------
    velocity:
        Propagation velocity (default 1).

    Notes
    -----
    ``current_time`` is advisory display state; no computation reads it.
    """

    def __init__(self, velocity: float = 1.0) -> None:
        self._waves: List[Wave] = []
        self.velocity = float(velocity)
        self.current_time = 0.0

    @classmethod
    def from_parameters(cls, rows: Iterable[WaveRow], velocity: float = 1.0) -> WaveCollection:
        """Build a collection from ``(kind, amplitude, frequency, phase)`` rows."""
        coll = cls(velocity=velocity)
        for kind, amplitude, frequency, phase in rows:
            coll.add(make_wave(kind, amplitude, frequency, phase))
        return coll

    # ------------------------------------------------------------------
    # Wave management
    # ------------------------------------------------------------------

    def add(self, wave: Wave) -> None:
        self._waves.append(wave)

    def remove(self, index: int) -> None:
        """Remove the wave at ``index``; out-of-range indices are ignored."""
        if 0 <= index < len(self._waves):
            del self._waves[index]

    def clear(self) -> None:
        self._waves.clear()

    def get_wave_count(self) -> int:
        return len(self._waves)

    def get_wave(self, index: int) -> Optional[Wave]:
        """Owned wave at ``index`` or None when out of range."""
        if 0 <= index < len(self._waves):
            return self._waves[index]
        return None

    @property
    def waves(self) -> Tuple[Wave, ...]:
        return tuple(self._waves)

    def __len__(self) -> int:
        return len(self._waves)

    def __iter__(self) -> Iterator[Wave]:
        return iter(self._waves)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate_superposition(self, x, t):
        """Sum of every member's value at ``(x, t)``; 0 for an empty collection."""
        total = np.zeros(np.broadcast(np.asarray(x, dtype=float), np.asarray(t, dtype=float)).shape)
        for wave in self._waves:
            total = total + wave.evaluate(x, t)
        if total.ndim == 0:
            return float(total)
        return total

    def evaluate_wave(self, index: int, x, t):
        wave = self.get_wave(index)
        if wave is None:
            return 0.0
        return wave.evaluate(x, t)

    # ------------------------------------------------------------------
    # Series generation
    # ------------------------------------------------------------------

    def generate_time_series(self, duration: float, sample_rate: float, position: float = 0.0) -> np.ndarray:
        """Sample the superposition at ``t = i / sample_rate``, ``i = 0..N-1``."""
        n = _n_samples(duration, sample_rate)
        t = np.arange(n, dtype=float) / sample_rate
        return np.asarray(self.evaluate_superposition(position, t), dtype=float).reshape(n)

    def generate_detailed_time_series(
        self, duration: float, sample_rate: float, position: float = 0.0
    ) -> TimeSeries:
        """Time series plus backward-difference velocity and acceleration."""
        n = _n_samples(duration, sample_rate)
        t = np.arange(n, dtype=float) / sample_rate
        y = np.asarray(self.evaluate_superposition(position, t), dtype=float).reshape(n)

        vel = np.zeros(n)
        acc = np.zeros(n)
        if n > 1:
            vel[1:] = (y[1:] - y[:-1]) * sample_rate
        if n > 2:
            acc[2:] = (y[2:] - 2.0 * y[1:-1] + y[:-2]) * sample_rate * sample_rate

        return TimeSeries(time=t, amplitude=y, velocity=vel, acceleration=acc)

    def generate_spatial_series(self, length: float, sample_rate: float, time: float = 0.0) -> np.ndarray:
        """Sample the superposition at ``x = i / sample_rate`` for a fixed time."""
        n = _n_samples(length, sample_rate)
        x = np.arange(n, dtype=float) / sample_rate
        return np.asarray(self.evaluate_superposition(x, time), dtype=float).reshape(n)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze_waves(
        self,
        data: Sequence[float],
        sample_rate: float,
        *,
        beating_max_frequency: float = 2.0,
        resonance_tolerance: float = 0.01,
    ) -> WaveAnalysis:
        """Statistics of ``data`` combined with the collection's dominant frequency.

        ``sample_rate`` is part of the call contract; the frequency reported is
        the dominant member frequency, not a spectral estimate.
        """
        y = np.asarray(data, dtype=float).ravel()
        if y.size == 0:
            return WaveAnalysis(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, "No data")

        rms = float(np.sqrt(np.mean(y * y)))
        freq = self.get_dominant_frequency()
        return WaveAnalysis(
            max_amplitude=float(np.max(y)),
            min_amplitude=float(np.min(y)),
            rms_amplitude=rms,
            frequency=freq,
            period=1.0 / freq if freq > 0 else 0.0,
            energy=0.5 * rms * rms,
            phenomenon=self.detect_phenomenon(
                beating_max_frequency=beating_max_frequency,
                resonance_tolerance=resonance_tolerance,
            ),
        )

    def calculate_beat_frequency(self) -> float:
        """Smallest positive gap between sorted member frequencies (0 if none)."""
        if len(self._waves) < 2:
            return 0.0
        freqs = np.sort([w.frequency for w in self._waves])
        gaps = np.diff(freqs)
        gaps = gaps[gaps > 0]
        if gaps.size == 0:
            return 0.0
        return float(np.min(gaps))

    def detect_interference(self) -> bool:
        return len(self._waves) > 1

    def detect_phenomenon(self, *, beating_max_frequency: float = 2.0, resonance_tolerance: float = 0.01) -> str:
        """Qualitative label; beating takes precedence over resonance."""
        n = len(self._waves)
        if n == 0:
            return "No waves"
        if n == 1:
            return "Single wave"

        beat = self.calculate_beat_frequency()
        if 0.0 < beat < beating_max_frequency:
            return "Beating"

        freqs = [w.frequency for w in self._waves]
        for i in range(n):
            for j in range(i + 1, n):
                if abs(freqs[i] - freqs[j]) < resonance_tolerance:
                    return "Resonance"
        return "Superposition"

    def calculate_total_energy(self) -> float:
        return float(sum(w.energy for w in self._waves))

    def get_max_amplitude(self) -> float:
        return max([0.0] + [w.amplitude for w in self._waves])

    def get_dominant_frequency(self) -> float:
        """Frequency of the largest-amplitude member (first one wins ties)."""
        max_amp = 0.0
        dominant = 0.0
        for wave in self._waves:
            if wave.amplitude > max_amp:
                max_amp = wave.amplitude
                dominant = wave.frequency
        return dominant
