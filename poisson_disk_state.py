"""
Runtime state for Fast Poisson-Disk Sampling
Taichi initialization and shared grid conventions
"""

import numpy as np
import taichi as ti
import poisson_disk_config as C

# =============================================================================
# Initialize Taichi
# =============================================================================
# fast_math off: no FMA contraction, so kernel distances round like Python's
ti.init(arch=C.ARCH, default_fp=C.DEFAULT_FP, fast_math=False)

# =============================================================================
# Grid Cell Conventions
# =============================================================================
# Grid storage is plain numpy owned by each SpatialGrid and handed to kernels
# as ndarray arguments, so kernels compile once and memory goes with the grid.
EMPTY = -1             # cell holds no sample (same marker as a linked-list tail)
REF_DTYPE = np.int32   # sample index stored per cell (ti.i32 in kernels)
COORD_DTYPE = np.float64   # sample coordinates stored per cell (ti.f64 in kernels)
