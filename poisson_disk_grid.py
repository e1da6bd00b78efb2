"""
Spatial Grid for Minimum-Distance Queries
Uniform 2D grid holding at most one sample per cell
"""

import math
import numpy as np
import taichi as ti
import poisson_disk_config as C
from poisson_disk_state import EMPTY, REF_DTYPE, COORD_DTYPE

# =============================================================================
# Grid Helper Functions
# =============================================================================

@ti.func
def cell_of(x, y, cols, rows, cell_size):
    """
    Map a domain position to its grid cell, clamped to [0, cols) x [0, rows).

    Returns:
        grid cell coordinates (int2)
    """
    ci = ti.cast(ti.floor(x / cell_size), ti.i32)
    cj = ti.cast(ti.floor(y / cell_size), ti.i32)
    ci = ti.max(ti.min(ci, cols - 1), 0)
    cj = ti.max(ti.min(cj, rows - 1), 0)
    return ti.Vector([ci, cj])


# =============================================================================
# Neighbourhood Query
# =============================================================================

@ti.kernel
def neighbour_within(ref: ti.types.ndarray(dtype=ti.i32, ndim=2),
                     site: ti.types.ndarray(dtype=ti.f64, ndim=3),
                     cell_size: ti.f64,
                     x: ti.f64, y: ti.f64, squared_radius: ti.f64) -> ti.i32:
    """
    Scan the 21-cell footprint around (x, y) for a sample closer than
    sqrt(squared_radius).

    Grid extent comes from the arrays, so one compiled kernel serves every
    grid.
    """
    cols = ref.shape[0]
    rows = ref.shape[1]
    c = cell_of(x, y, cols, rows, cell_size)
    found = 0

    # 21-cell footprint, unrolled at compile time
    for k in ti.static(range(len(C.NEIGHBOURHOOD))):
        ni = c[0] + C.NEIGHBOURHOOD[k][0]
        nj = c[1] + C.NEIGHBOURHOOD[k][1]

        if ni >= 0 and ni < cols and nj >= 0 and nj < rows:
            if ref[ni, nj] != EMPTY:
                dx = x - site[ni, nj, 0]
                dy = y - site[ni, nj, 1]
                if dx * dx + dy * dy < squared_radius:
                    found = 1

    return found


class SpatialGrid:
    """
    Lookup table partitioning [0, width) x [0, height) into square cells.

    Each cell stores the index of the sample it holds (or EMPTY) together with
    that sample's coordinates, so a neighbourhood test reads a single cell.

    Args:
        width, height: domain extent
        cell_size: side of a cell (radius / sqrt(2) for Poisson-disk sampling)
    """

    def __init__(self, width, height, cell_size):
        if not (math.isfinite(cell_size) and cell_size > 0):
            raise ValueError(f"cell_size must be positive and finite, got {cell_size!r}")

        self.cell_size = float(cell_size)
        self.cols = math.ceil(width / self.cell_size)
        self.rows = math.ceil(height / self.cell_size)

        self.ref = np.full((self.cols, self.rows), EMPTY, dtype=REF_DTYPE)
        self.site = np.zeros((self.cols, self.rows, 2), dtype=COORD_DTYPE)

    @property
    def shape(self):
        return self.cols, self.rows

    # =========================================================================
    # Cell Helpers
    # =========================================================================

    def world_to_cell(self, x, y):
        """
        Map a domain position to its cell.

        Clamped to the grid so a point a rounding error below the upper
        bound still lands in the last row/column.
        """
        i = min(max(math.floor(x / self.cell_size), 0), self.cols - 1)
        j = min(max(math.floor(y / self.cell_size), 0), self.rows - 1)
        return i, j

    def contains_cell(self, i, j):
        return 0 <= i < self.cols and 0 <= j < self.rows

    # =========================================================================
    # Cell Access
    # =========================================================================

    def get(self, i, j):
        """Index of the sample stored in cell (i, j), or None if empty."""
        ref = self.ref[i, j]
        return None if ref == EMPTY else int(ref)

    def set(self, i, j, index, x=0.0, y=0.0):
        """Store sample `index` at (x, y) in cell (i, j); None empties the cell."""
        if index is None:
            self.ref[i, j] = EMPTY
            return
        self.ref[i, j] = index
        self.site[i, j, 0] = x
        self.site[i, j, 1] = y

    def insert(self, index, x, y):
        """Store a sample in the cell covering its coordinates."""
        i, j = self.world_to_cell(x, y)
        self.set(i, j, index, x, y)
        return i, j

    def clear(self):
        self.ref.fill(EMPTY)

    def references(self):
        """Copy of the per-cell sample indices (EMPTY where unoccupied)."""
        return self.ref.copy()

    def occupied_count(self):
        return int(np.count_nonzero(self.ref != EMPTY))

    def has_neighbour_within(self, x, y, squared_radius):
        """
        Check whether a stored sample lies closer than sqrt(squared_radius)
        to (x, y).

        Only the 21 cells that can hold such a sample are visited, which is
        exhaustive as long as squared_radius <= 2 * cell_size².
        """
        return bool(neighbour_within(self.ref, self.site, self.cell_size,
                                     float(x), float(y), float(squared_radius)))
