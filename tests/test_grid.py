# ==============================================================================
# File: tests/test_grid.py
# Purpose: Unit tests for the spatial grid (cell mapping, access, neighbourhood).
# ==============================================================================
import math
import unittest

import numpy as np
import taichi as ti

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from poisson_disk_grid import SpatialGrid
from poisson_disk_state import EMPTY


class TestGridGeometry(unittest.TestCase):
    """Grid sizing and world-to-cell mapping."""

    def setUp(self):
        print(f"\n[TEST] Running {self._testMethodName}...")

    def test_shape_rounds_up(self):
        self.assertEqual(SpatialGrid(10.0, 5.0, 1.0).shape, (10, 5))
        self.assertEqual(SpatialGrid(10.5, 5.0, 1.0).shape, (11, 5))

    def test_shape_for_poisson_cell_size(self):
        grid = SpatialGrid(100.0, 100.0, 5.0 * math.sqrt(0.5))
        self.assertEqual(grid.shape, (29, 29))

    def test_invalid_cell_size(self):
        for bad in (0.0, -1.0, float("nan"), float("inf")):
            with self.assertRaises(ValueError):
                SpatialGrid(10.0, 10.0, bad)

    def test_world_to_cell(self):
        grid = SpatialGrid(10.0, 5.0, 1.0)
        self.assertEqual(grid.world_to_cell(2.5, 3.9), (2, 3))
        self.assertEqual(grid.world_to_cell(0.0, 0.0), (0, 0))
        self.assertEqual(grid.world_to_cell(9.999, 4.999), (9, 4))

    def test_world_to_cell_clamps(self):
        grid = SpatialGrid(10.0, 5.0, 1.0)
        self.assertEqual(grid.world_to_cell(10.0, 5.0), (9, 4))
        self.assertEqual(grid.world_to_cell(-0.5, -0.5), (0, 0))

    def test_contains_cell(self):
        grid = SpatialGrid(10.0, 5.0, 1.0)
        self.assertTrue(grid.contains_cell(0, 0))
        self.assertTrue(grid.contains_cell(9, 4))
        self.assertFalse(grid.contains_cell(10, 0))
        self.assertFalse(grid.contains_cell(0, 5))
        self.assertFalse(grid.contains_cell(-1, 2))


class TestGridAccess(unittest.TestCase):
    """Cell get/set/insert/clear."""

    def setUp(self):
        print(f"\n[TEST] Running {self._testMethodName}...")
        self.grid = SpatialGrid(10.0, 10.0, 1.0)

    def test_starts_empty(self):
        self.assertEqual(self.grid.occupied_count(), 0)
        self.assertIsNone(self.grid.get(3, 3))
        self.assertTrue(np.all(self.grid.references() == EMPTY))

    def test_set_and_get(self):
        self.grid.set(3, 4, 7, 3.5, 4.5)
        self.assertEqual(self.grid.get(3, 4), 7)
        self.assertEqual(self.grid.occupied_count(), 1)

        self.grid.set(3, 4, None)
        self.assertIsNone(self.grid.get(3, 4))
        self.assertEqual(self.grid.occupied_count(), 0)

    def test_index_zero_is_not_empty(self):
        self.grid.set(0, 0, 0, 0.5, 0.5)
        self.assertEqual(self.grid.get(0, 0), 0)

    def test_insert_uses_point_cell(self):
        cell = self.grid.insert(2, 6.2, 1.7)
        self.assertEqual(cell, (6, 1))
        self.assertEqual(self.grid.get(6, 1), 2)
        self.assertEqual(self.grid.references()[6, 1], 2)

    def test_clear(self):
        for k in range(5):
            self.grid.insert(k, k + 0.5, k + 0.5)
        self.assertEqual(self.grid.occupied_count(), 5)

        self.grid.clear()
        self.assertEqual(self.grid.occupied_count(), 0)
        self.assertEqual(self.grid.shape, (10, 10))


class TestGridNeighbourhood(unittest.TestCase):
    """Minimum-distance query over the 21-cell footprint."""

    def setUp(self):
        print(f"\n[TEST] Running {self._testMethodName}...")

    def test_close_point_found(self):
        grid = SpatialGrid(10.0, 10.0, 1.0)
        grid.insert(0, 5.0, 5.0)
        self.assertTrue(grid.has_neighbour_within(5.5, 5.0, 1.0))

    def test_distant_point_ignored(self):
        grid = SpatialGrid(10.0, 10.0, 1.0)
        grid.insert(0, 5.0, 5.0)
        self.assertFalse(grid.has_neighbour_within(7.0, 5.0, 1.0))

    def test_distance_is_strict(self):
        grid = SpatialGrid(10.0, 10.0, 1.0)
        grid.insert(0, 5.0, 5.0)
        # exactly at the radius is allowed
        self.assertFalse(grid.has_neighbour_within(6.0, 5.0, 1.0))

    def test_empty_grid_edges(self):
        grid = SpatialGrid(10.0, 10.0, 1.0)
        self.assertFalse(grid.has_neighbour_within(0.0, 0.0, 1.0))
        self.assertFalse(grid.has_neighbour_within(9.99, 9.99, 1.0))

    def test_two_cells_away_straight(self):
        """A conflicting sample two columns over is still visited."""
        grid = SpatialGrid(10.0, 10.0, math.sqrt(0.5))
        grid.insert(0, 3.09, 1.5)
        self.assertEqual(grid.world_to_cell(2.1, 1.5), (2, 2))
        self.assertEqual(grid.world_to_cell(3.09, 1.5), (4, 2))
        self.assertTrue(grid.has_neighbour_within(2.1, 1.5, 1.0))

    def test_two_cells_away_offset(self):
        grid = SpatialGrid(10.0, 10.0, math.sqrt(0.5))
        grid.insert(0, 2.85, 2.15)
        self.assertEqual(grid.world_to_cell(2.1, 2.1), (2, 2))
        self.assertEqual(grid.world_to_cell(2.85, 2.15), (4, 3))
        self.assertTrue(grid.has_neighbour_within(2.1, 2.1, 1.0))

    def test_cleared_grid_finds_nothing(self):
        grid = SpatialGrid(10.0, 10.0, 1.0)
        grid.insert(0, 5.0, 5.0)
        grid.clear()
        self.assertFalse(grid.has_neighbour_within(5.0, 5.0, 1.0))

    def test_boundary_rounds_like_python(self):
        """Kernel distance at the radius matches Python float arithmetic bit for bit."""
        sx, sy = 1.1, 2.3
        qx, qy = 1.7, 2.9
        dx = qx - sx
        dy = qy - sy
        squared = dx * dx + dy * dy

        grid = SpatialGrid(10.0, 10.0, 1.0)
        grid.insert(0, sx, sy)
        self.assertFalse(grid.has_neighbour_within(qx, qy, squared))
        self.assertTrue(grid.has_neighbour_within(qx, qy, math.nextafter(squared, math.inf)))

    def test_fast_math_disabled(self):
        self.assertFalse(ti.lang.impl.current_cfg().fast_math)


class TestGridLifetime(unittest.TestCase):
    """Grids are plain arrays; building many must not exhaust the runtime."""

    def setUp(self):
        print(f"\n[TEST] Running {self._testMethodName}...")

    def test_many_grids_share_one_kernel(self):
        for _ in range(600):
            grid = SpatialGrid(10.0, 10.0, 2.0 * math.sqrt(0.5))
            grid.insert(0, 1.0, 1.0)
            self.assertTrue(grid.has_neighbour_within(1.5, 1.0, 4.0))
            self.assertFalse(grid.has_neighbour_within(8.0, 8.0, 4.0))

    def test_grid_storage_is_numpy(self):
        grid = SpatialGrid(10.0, 5.0, 1.0)
        self.assertIsInstance(grid.ref, np.ndarray)
        self.assertEqual(grid.ref.shape, (10, 5))
        self.assertEqual(grid.site.shape, (10, 5, 2))


if __name__ == '__main__':
    unittest.main()
