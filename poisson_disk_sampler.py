"""
Sampler: Fast Poisson-Disk Sampling (Bridson-style dart throwing)

Darts are thrown at a fixed distance around active points, sweeping the
circle in equal angle steps, and accepted when the spatial grid reports no
sample closer than the radius.
"""

import math
import time
import numpy as np
import poisson_disk_config as C
from poisson_disk_grid import SpatialGrid

TWO_PI = math.pi * 2


class ActivePoint:
    """Process-list entry: an accepted sample that can still spawn neighbours."""

    __slots__ = ("x", "y", "angle", "tries")

    def __init__(self, x, y, angle, tries=0):
        self.x = x
        self.y = y
        self.angle = angle  # direction of the next dart (never wrapped)
        self.tries = tries  # directions already used


def _require_positive(name, value):
    if not (math.isfinite(value) and value > 0):
        raise ValueError(f"{name} must be positive and finite, got {value!r}")


class Sampler:
    """
    Poisson-disk sampler over the rectangle [0, width) x [0, height).

    Args:
        shape: (width, height) of the domain
        radius: minimum distance between generated samples
        tries: darts per active point (None/0 = DEFAULT_TRIES, floored to MIN_TRIES)
        rng: zero-argument callable returning a float in [0, 1)
             (None = numpy.random.random)

    Raises:
        ValueError: non-positive or non-finite extent/radius, non-finite tries
    """

    def __init__(self, shape, radius, tries=None, rng=None):
        width, height = shape
        _require_positive("width", width)
        _require_positive("height", height)
        _require_positive("radius", radius)
        if tries is not None and not math.isfinite(tries):
            raise ValueError(f"tries must be finite, got {tries!r}")

        self.width = width
        self.height = height
        self.radius = radius
        self.max_tries = max(C.MIN_TRIES, math.ceil(tries or C.DEFAULT_TRIES))

        self.rng = rng if rng is not None else np.random.random

        # Derived constants
        precision_mitigation = max(1, int(max(width, height) / C.PRECISION_SCALE))
        self.squared_radius = radius * radius
        self.radius_plus_epsilon = radius + C.EPS_RADIUS * precision_mitigation
        self.cell_size = radius * C.CELL_SCALE

        self.angle_increment = TWO_PI / self.max_tries
        self.angle_increment_on_success = C.ANGLE_ON_SUCCESS
        self.tries_increment_on_success = math.ceil(self.angle_increment_on_success / self.angle_increment)

        self.grid = SpatialGrid(width, height, self.cell_size)
        self._points = []
        self._process = []

    def __len__(self):
        return len(self._points)

    def __repr__(self):
        return (f"Sampler(shape=({self.width}, {self.height}), radius={self.radius}, "
                f"tries={self.max_tries}, points={len(self._points)})")

    # =========================================================================
    # Seeding
    # =========================================================================

    def add_random_point(self):
        """Add a uniformly random point without any distance check."""
        x = self.rng() * self.width
        y = self.rng() * self.height
        angle = self.rng() * TWO_PI
        return self._direct_add(ActivePoint(x, y, angle))

    def add_point(self, point):
        """
        Add a caller-chosen point without checking its distance to existing
        samples.

        Returns:
            (x, y) if the point lies inside the domain, otherwise None
        """
        x, y = point
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self._direct_add(ActivePoint(x, y, self.rng() * TWO_PI))

    def _direct_add(self, active):
        index = len(self._points)
        self._process.append(active)
        self._points.append((active.x, active.y))
        self.grid.insert(index, active.x, active.y)
        return active.x, active.y

    # =========================================================================
    # Generation
    # =========================================================================

    def _accepts(self, x, y):
        return (0 <= x < self.width and 0 <= y < self.height
                and not self.grid.has_neighbour_within(x, y, self.squared_radius))

    def next(self):
        """
        Generate one more sample.

        Returns:
            (x, y) of the new sample, or None once no active point remains
        """
        process = self._process

        while process:
            index = int(len(process) * self.rng())
            current = process[index]
            angle = current.angle
            tries = current.tries

            # Widen the first sweep so early spawns are not collinear
            if tries == 0:
                angle = angle + (self.rng() - 0.5) * C.PI_DIV_3 * 4

            while tries < self.max_tries:
                x = current.x + math.cos(angle) * self.radius_plus_epsilon
                y = current.y + math.sin(angle) * self.radius_plus_epsilon

                if self._accepts(x, y):
                    current.angle = angle + self.angle_increment_on_success + self.rng() * self.angle_increment
                    current.tries = tries + self.tries_increment_on_success
                    return self._direct_add(ActivePoint(x, y, angle))

                angle = angle + self.angle_increment
                tries += 1

            # Exhausted: swap with last and pop
            last = process.pop()
            if index < len(process):
                process[index] = last

        return None

    def fill(self):
        """
        Generate samples until the domain is saturated.

        Seeds a random point if the sampler is empty. Blocks until done.

        Returns:
            read-only (N, 2) array of all samples
        """
        t0 = time.time()
        start = len(self._points)

        if not self._points:
            self.add_random_point()

        while self.next() is not None:
            pass

        if C.VERBOSE:
            elapsed = time.time() - t0
            print(f"[FILL] {len(self._points) - start} new samples "
                  f"({len(self._points)} total) in {elapsed*1000:.2f} ms")

        return self.get_all_points()

    # =========================================================================
    # Access & Reset
    # =========================================================================

    def get_all_points(self):
        """Read-only (N, 2) float64 copy of the samples, in generation order."""
        points = np.array(self._points, dtype=np.float64).reshape(-1, 2)
        points.setflags(write=False)
        return points

    def get_active_points(self):
        """Read-only (M, 2) float64 copy of the points still able to spawn."""
        active = np.array([(p.x, p.y) for p in self._process], dtype=np.float64).reshape(-1, 2)
        active.setflags(write=False)
        return active

    def reset(self):
        """Drop all samples; domain, radius and grid allocation are kept."""
        self.grid.clear()
        self._points = []
        self._process.clear()
