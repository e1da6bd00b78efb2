"""
Configuration for Fast Poisson-Disk Sampling
Dart throwing around active points, accelerated by a uniform grid

All tunables and constants in one place.
"""

import taichi as ti
import math

# =============================================================================
# Architecture & Platform
# =============================================================================
ARCH = ti.cpu          # sampling is sequential; f64 is not available on metal
DEFAULT_FP = ti.f64    # same precision as Python floats

# =============================================================================
# Sampling
# =============================================================================
DEFAULT_TRIES = 30     # darts thrown around each active point
MIN_TRIES = 3          # fewer directions make the sweep degenerate

# Candidates are placed a hair beyond the radius so float rounding does not
# reject points that are exactly valid. The radius epsilon grows with the
# domain (one step per PRECISION_SCALE units of the larger side).
EPS_RADIUS = 1e-14
EPS_ANGLE = 2e-14
PRECISION_SCALE = 64

# Angle advanced on a successful spawn (60° + epsilon)
PI_DIV_3 = math.pi / 3.0
ANGLE_ON_SUCCESS = PI_DIV_3 + EPS_ANGLE

# =============================================================================
# Spatial Grid
# =============================================================================
# Cell side is radius / sqrt(2), so any disk of radius r around a candidate
# is covered by the centre cell, its 8-connected ring and the 12 cells at
# Chebyshev distance 2 that intersect the disk (corners excluded).
CELL_SCALE = math.sqrt(0.5)

NEIGHBOURHOOD = (
    (0, 0), (0, -1), (-1, 0),
    (1, 0), (0, 1), (-1, -1),
    (1, -1), (-1, 1), (1, 1),
    (0, -2), (-2, 0), (2, 0),
    (0, 2), (-1, -2), (1, -2),
    (-2, -1), (2, -1), (-2, 1),
    (2, 1), (-1, 2), (1, 2),
)

# =============================================================================
# Demo Run (run_poisson_disk.py)
# =============================================================================
WIDTH = 600.0
HEIGHT = 400.0
RADIUS = 8.0
TRIES = DEFAULT_TRIES
SEED = 1234

RUN_MODE = "progressive"   # "fill" = blocking fill + stats, "progressive" = animated
POINTS_PER_FRAME = 20      # next() calls per rendered frame in progressive mode

# =============================================================================
# Preview Window
# =============================================================================
WINDOW_RES = (900, 600)
BACKGROUND = 0x101418
POINT_COLOR = 0xA0C8FF
ACTIVE_COLOR = 0xFF6040
POINT_PIXELS = 2.0

# =============================================================================
# Diagnostics
# =============================================================================
VERBOSE = False        # library logging; the demo runner switches it on
