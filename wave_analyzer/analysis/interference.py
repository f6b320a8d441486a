"""Interference, beats, standing waves and resonance.

Every routine borrows the waves it is given and samples their sum with
:func:`calculate_total_amplitude`. Spatial sampling uses ``num_points`` evenly
spaced positions over ``[0, length]`` (both ends included).

Degenerate inputs (no waves, no sample points) return empty or zero results.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from wave_analyzer.models.results import (
    InterferenceNode,
    InterferenceResult,
    InterferenceType,
    NodeType,
)
from wave_analyzer.models.waves import Wave

logger = logging.getLogger(__name__)

DEFAULT_LENGTH = 10.0
DEFAULT_NUM_POINTS = 1000


def _positions(length: float, num_points: int) -> np.ndarray:
    return np.linspace(0.0, length, max(int(num_points), 0))


def calculate_total_amplitude(waves: Sequence[Wave], position, time):
    """Plain sum of ``wave.evaluate(position, time)`` over ``waves``."""
    total = np.zeros(np.broadcast(np.asarray(position, dtype=float), np.asarray(time, dtype=float)).shape)
    for wave in waves:
        total = total + wave.evaluate(position, time)
    if total.ndim == 0:
        return float(total)
    return total


def _peak(samples: np.ndarray) -> float:
    if samples.size == 0:
        return 0.0
    return float(max(abs(np.min(samples)), abs(np.max(samples))))


def _split_nodes(nodes: Sequence[InterferenceNode]):
    node_pos = tuple(n.position for n in nodes if n.type is NodeType.NODE)
    anti_pos = tuple(n.position for n in nodes if n.type is NodeType.ANTINODE)
    return node_pos, anti_pos


# =====================================================================
#  Classification
# =====================================================================

def classify_interference(
    amplitude1: float, amplitude2: float, result_amplitude: float, tolerance: float = 0.1
) -> InterferenceType:
    """Compare the observed peak with the ``A1 + A2`` and ``|A1 - A2|`` envelopes."""
    max_possible = amplitude1 + amplitude2
    min_possible = abs(amplitude1 - amplitude2)
    if result_amplitude >= max_possible - tolerance:
        return InterferenceType.CONSTRUCTIVE
    if result_amplitude <= min_possible + tolerance:
        return InterferenceType.DESTRUCTIVE
    return InterferenceType.PARTIAL


def describe_interference(
    kind: InterferenceType,
    beat_frequency: float = 0.0,
    node_count: int = 0,
    antinode_count: int = 0,
) -> str:
    if kind is InterferenceType.CONSTRUCTIVE:
        text = "Constructive interference - waves reinforce each other"
    elif kind is InterferenceType.DESTRUCTIVE:
        text = "Destructive interference - waves cancel each other"
    elif kind is InterferenceType.PARTIAL:
        text = "Partial interference"
        if beat_frequency > 0:
            text += f" with beating at {beat_frequency:g} Hz"
    else:
        text = "No interference detected"

    if node_count > 0:
        text += f". {node_count} nodes detected"
    if antinode_count > 0:
        text += f". {antinode_count} antinodes detected"
    return text


def calculate_two_wave_interference(
    wave1: Wave,
    wave2: Wave,
    time: float = 0.0,
    length: float = DEFAULT_LENGTH,
    num_points: int = DEFAULT_NUM_POINTS,
    *,
    tolerance: float = 0.1,
    node_threshold: float = 0.1,
) -> InterferenceResult:
    """Sample ``wave1 + wave2`` over ``[0, length]`` and classify the result."""
    waves = (wave1, wave2)
    samples = np.asarray(calculate_total_amplitude(waves, _positions(length, num_points), time), dtype=float)
    peak = _peak(samples)

    kind = classify_interference(wave1.amplitude, wave2.amplitude, peak, tolerance)
    beat = calculate_beat_frequency(wave1.frequency, wave2.frequency)
    nodes = find_interference_nodes(waves, time, length, num_points, node_threshold)
    node_pos, anti_pos = _split_nodes(nodes)

    return InterferenceResult(
        type=kind,
        amplitude=peak,
        phase=calculate_phase_shift(wave1, wave2),
        beat_frequency=beat,
        node_positions=node_pos,
        antinode_positions=anti_pos,
        description=describe_interference(kind, beat, len(node_pos), len(anti_pos)),
    )


def calculate_multi_wave_interference(
    waves: Sequence[Wave],
    time: float = 0.0,
    length: float = DEFAULT_LENGTH,
    num_points: int = DEFAULT_NUM_POINTS,
    *,
    node_threshold: float = 0.1,
    resonance_tolerance: float = 0.01,
    beating_max_frequency: float = 2.0,
) -> InterferenceResult:
    """Classify the sum of any number of waves.

    Resonance (two members within ``resonance_tolerance`` Hz) is reported as
    constructive; otherwise the result is partial, with a beating note when the
    first two members beat below ``beating_max_frequency``.
    """
    if len(waves) == 0:
        return InterferenceResult(type=InterferenceType.NO_INTERFERENCE, description="No waves provided")
    if len(waves) == 1:
        return InterferenceResult(
            type=InterferenceType.NO_INTERFERENCE,
            amplitude=float(waves[0].amplitude),
            description="Single wave - no interference",
        )

    samples = np.asarray(calculate_total_amplitude(waves, _positions(length, num_points), time), dtype=float)
    beat = calculate_beat_frequency(waves[0].frequency, waves[1].frequency)
    nodes = find_interference_nodes(waves, time, length, num_points, node_threshold)
    node_pos, anti_pos = _split_nodes(nodes)

    if detect_resonance(waves, resonance_tolerance):
        kind = InterferenceType.CONSTRUCTIVE
        description = "Resonance detected - constructive interference"
    elif 0.0 < beat < beating_max_frequency:
        kind = InterferenceType.PARTIAL
        description = "Beat phenomenon detected"
    else:
        kind = InterferenceType.PARTIAL
        description = "Complex multi-wave interference"

    return InterferenceResult(
        type=kind,
        amplitude=_peak(samples),
        beat_frequency=beat,
        node_positions=node_pos,
        antinode_positions=anti_pos,
        description=description,
    )


# =====================================================================
#  Beats
# =====================================================================

def calculate_beat_frequency(f1: float, f2: float) -> float:
    return abs(f1 - f2)


def calculate_beat_period(f1: float, f2: float) -> float:
    beat = calculate_beat_frequency(f1, f2)
    return 1.0 / beat if beat > 0 else 0.0


def calculate_beat_envelope(
    wave1: Wave, wave2: Wave, duration: float = 10.0, sample_rate: float = 100.0
) -> np.ndarray:
    """Envelope ``|mean(A) + |A1 - A2| * cos(pi * f_beat * t)|`` sampled at ``t = i / sample_rate``."""
    n = max(int(duration * sample_rate), 0)
    t = np.arange(n, dtype=float) / sample_rate
    beat = calculate_beat_frequency(wave1.frequency, wave2.frequency)
    avg = (wave1.amplitude + wave2.amplitude) / 2.0
    diff = abs(wave1.amplitude - wave2.amplitude)
    return np.abs(avg + diff * np.cos(np.pi * beat * t))


# =====================================================================
#  Nodes and standing waves
# =====================================================================

def _local_extrema(data: np.ndarray, find_maxima: bool = True) -> np.ndarray:
    """Indices of strict interior extrema (immediate-neighbour comparison)."""
    if data.size < 3:
        return np.zeros(0, dtype=int)
    mid = data[1:-1]
    if find_maxima:
        mask = (mid > data[:-2]) & (mid > data[2:])
    else:
        mask = (mid < data[:-2]) & (mid < data[2:])
    return np.nonzero(mask)[0] + 1


def find_interference_nodes(
    waves: Sequence[Wave],
    time: float = 0.0,
    length: float = DEFAULT_LENGTH,
    num_points: int = DEFAULT_NUM_POINTS,
    threshold: float = 0.1,
) -> List[InterferenceNode]:
    """Nodes (minima of |sum| at or below ``threshold``) then antinodes (maxima at or above it)."""
    x = _positions(length, num_points)
    amp = np.abs(np.asarray(calculate_total_amplitude(waves, x, time), dtype=float)).reshape(x.shape)

    nodes: List[InterferenceNode] = []
    for i in _local_extrema(amp, find_maxima=False):
        if amp[i] <= threshold:
            nodes.append(InterferenceNode(float(x[i]), float(amp[i]), NodeType.NODE))
    for i in _local_extrema(amp, find_maxima=True):
        if amp[i] >= threshold:
            nodes.append(InterferenceNode(float(x[i]), float(amp[i]), NodeType.ANTINODE))
    logger.debug("nodes: %d waves over %d points -> %d extrema kept", len(waves), x.size, len(nodes))
    return nodes


def calculate_standing_wave(
    amplitude1: float,
    amplitude2: float,
    frequency: float,
    phase_shift: float = np.pi,
    length: float = DEFAULT_LENGTH,
    num_points: int = DEFAULT_NUM_POINTS,
    time: float = 0.0,
) -> np.ndarray:
    """Counter-propagating superposition ``A1 sin(kx - wt) + A2 sin(kx + wt + phase_shift)``.

    Unit propagation speed, so ``k = w = 2*pi*frequency``. ``phase_shift`` is in radians.
    """
    x = _positions(length, num_points)
    k = 2.0 * np.pi * frequency
    omega = 2.0 * np.pi * frequency
    forward = amplitude1 * np.sin(k * x - omega * time)
    backward = amplitude2 * np.sin(k * x + omega * time + phase_shift)
    return forward + backward


# =====================================================================
#  Phase relationships and resonance
# =====================================================================

def calculate_phase_shift(wave1: Wave, wave2: Wave) -> float:
    """``phase2 - phase1`` in degrees, normalised into ``[0, 360)``."""
    diff = float(np.fmod(wave2.phase - wave1.phase, 360.0))
    while diff < 0.0:
        diff += 360.0
    while diff >= 360.0:
        diff -= 360.0
    return diff


def are_in_phase(wave1: Wave, wave2: Wave, tolerance: float = 0.1) -> bool:
    shift = calculate_phase_shift(wave1, wave2)
    return shift <= tolerance or abs(shift - 360.0) <= tolerance


def are_out_of_phase(wave1: Wave, wave2: Wave, tolerance: float = 0.1) -> bool:
    return abs(calculate_phase_shift(wave1, wave2) - 180.0) <= tolerance


def detect_resonance(waves: Sequence[Wave], frequency_tolerance: float = 0.01) -> bool:
    """True iff some pair of waves differs in frequency by at most ``frequency_tolerance``."""
    n = len(waves)
    for i in range(n):
        for j in range(i + 1, n):
            if abs(waves[i].frequency - waves[j].frequency) <= frequency_tolerance:
                return True
    return False


def calculate_resonance_amplification(waves: Sequence[Wave]) -> float:
    """``|sum at (0, 0)| / sum of amplitudes``; 0 when undefined."""
    if len(waves) == 0:
        return 0.0
    individual = float(sum(w.amplitude for w in waves))
    if not individual > 0:
        return 0.0
    return abs(calculate_total_amplitude(waves, 0.0, 0.0)) / individual


def calculate_rms_amplitude(data: Sequence[float]) -> float:
    y = np.asarray(data, dtype=float).ravel()
    if y.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(y * y)))


# =====================================================================
#  Slit patterns
# =====================================================================

def _screen_positions(screen_width: float, num_points: int) -> np.ndarray:
    return np.linspace(-screen_width / 2.0, screen_width / 2.0, max(int(num_points), 0))


def calculate_youngs_double_slit_pattern(
    wavelength: float,
    slit_separation: float,
    screen_distance: float,
    screen_width: float = 10.0,
    num_points: int = DEFAULT_NUM_POINTS,
) -> np.ndarray:
    """Normalised two-slit intensity ``cos^2(pi d y / (lambda L))`` across the screen.

    Small-angle approximation; ``y`` spans ``[-screen_width/2, screen_width/2]``.
    """
    y = _screen_positions(screen_width, num_points)
    arg = np.pi * slit_separation * y / (wavelength * screen_distance)
    return np.cos(arg) ** 2


def calculate_single_slit_diffraction(
    wavelength: float,
    slit_width: float,
    screen_distance: float,
    screen_width: float = 10.0,
    num_points: int = DEFAULT_NUM_POINTS,
) -> np.ndarray:
    """Normalised single-slit intensity ``sinc^2(a y / (lambda L))``; 1 at the centre."""
    y = _screen_positions(screen_width, num_points)
    # np.sinc(u) = sin(pi u) / (pi u)
    return np.sinc(slit_width * y / (wavelength * screen_distance)) ** 2
