"""Physical constants and conventional parameter ranges."""

from __future__ import annotations

import math

PI = math.pi
TWO_PI = 2.0 * math.pi
DEG_TO_RAD = PI / 180.0
RAD_TO_DEG = 180.0 / PI

DEFAULT_SAMPLE_RATE = 1000.0  # Hz
DEFAULT_DURATION = 5.0  # s

# Ranges offered by the interactive front-ends. Values outside are legal but flagged.
MIN_AMPLITUDE = 0.1
MAX_AMPLITUDE = 10.0
MIN_FREQUENCY = 0.1
MAX_FREQUENCY = 10.0
MIN_PHASE = 0.0
MAX_PHASE = 360.0
