"""
Measurement: Separation, Bounds and Spacing Statistics for a Sample Set
"""

import math
import numpy as np
import taichi as ti
import poisson_disk_config as C
import poisson_disk_state  # Initialize Taichi before the first kernel launch

# =============================================================================
# Nearest-Neighbour Distances
# =============================================================================

@ti.kernel
def _nearest_squared(pts: ti.types.ndarray(dtype=ti.f64, ndim=2),
                     out: ti.types.ndarray(dtype=ti.f64, ndim=1)):
    """
    Brute-force nearest neighbour per sample.

    For each sample i (parallel), scan all j != i and keep the smallest
    squared distance. O(N²), intended for validation rather than generation.
    """
    n = pts.shape[0]
    for i in range(n):
        best = ti.math.inf
        for j in range(n):
            if j != i:
                dx = pts[i, 0] - pts[j, 0]
                dy = pts[i, 1] - pts[j, 1]
                best = ti.min(best, dx * dx + dy * dy)
        out[i] = best


def _as_points(points):
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def nearest_neighbour_distances(points):
    """
    Distance from every sample to its closest other sample.

    Args:
        points: (N, 2) array-like

    Returns:
        (N,) float64 array (inf when N == 1)
    """
    pts = _as_points(points)
    n = len(pts)
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    if n == 1:
        return np.full(1, np.inf)

    out = np.empty(n, dtype=np.float64)
    _nearest_squared(pts, out)
    return np.sqrt(out)


def min_separation(points):
    """Smallest pairwise distance (inf for fewer than two samples)."""
    nn = nearest_neighbour_distances(points)
    if len(nn) < 2:
        return math.inf
    return float(nn.min())


def count_out_of_bounds(points, width, height):
    """Number of samples outside the half-open domain [0, width) x [0, height)."""
    pts = _as_points(points)
    inside = (pts[:, 0] >= 0) & (pts[:, 0] < width) & (pts[:, 1] >= 0) & (pts[:, 1] < height)
    return int(np.sum(~inside))


# =============================================================================
# Statistics (CPU-side helpers)
# =============================================================================

def compute_sample_stats(points, width, height, radius):
    """
    Summarize a sample set.

    Returns:
        dict with keys: count, density, min_separation, radius_ratio,
        mean, std, p10, p50, p90, out_of_bounds
        (mean/std/percentiles are over nearest-neighbour distances)
    """
    pts = _as_points(points)
    nn = nearest_neighbour_distances(pts)
    finite = nn[np.isfinite(nn)]

    min_sep = float(finite.min()) if len(finite) else math.inf
    stats = {
        'count': len(pts),
        'density': len(pts) / (width * height),
        'min_separation': min_sep,
        'radius_ratio': min_sep / radius,
        'out_of_bounds': count_out_of_bounds(pts, width, height),
    }

    if len(finite) == 0:
        stats.update({'mean': 0.0, 'std': 0.0, 'p10': 0.0, 'p50': 0.0, 'p90': 0.0})
        return stats

    stats.update({
        'mean': float(np.mean(finite)),
        'std': float(np.std(finite)),
        'p10': float(np.percentile(finite, 10)),
        'p50': float(np.percentile(finite, 50)),
        'p90': float(np.percentile(finite, 90)),
    })

    if C.VERBOSE:
        print(f"[MEASURE] {stats['count']} samples, min separation {min_sep:.6f} "
              f"({stats['radius_ratio']:.4f}× radius), out of bounds: {stats['out_of_bounds']}")

    return stats
