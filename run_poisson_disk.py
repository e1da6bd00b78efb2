"""
Main Entry Point: Fast Poisson-Disk Sampling Demo
Blocking fill with statistics, or progressive generation in a preview window
"""

import numpy as np
import poisson_disk_config as C
from poisson_disk_sampler import Sampler
import poisson_disk_measure as measure


def build_sampler():
    """Sampler for the configured domain, seeded for reproducible runs."""
    rng = np.random.default_rng(C.SEED)
    return Sampler((C.WIDTH, C.HEIGHT), C.RADIUS, tries=C.TRIES, rng=rng.random)


def run_fill(sampler):
    """Fill the domain in one blocking call and report statistics."""
    points = sampler.fill()
    stats = measure.compute_sample_stats(points, C.WIDTH, C.HEIGHT, C.RADIUS)

    print(f"[RUN] Samples: {stats['count']} (density {stats['density']:.6f} / unit²)")
    print(f"      Nearest neighbour: μ={stats['mean']:.4f} σ={stats['std']:.4f}")
    print(f"      Percentiles: p10={stats['p10']:.4f} p50={stats['p50']:.4f} p90={stats['p90']:.4f}")
    print(f"      Min separation: {stats['min_separation']:.6f} ({stats['radius_ratio']:.4f}× radius)")

    if stats['out_of_bounds'] > 0 or stats['radius_ratio'] < 1.0:
        print("⚠️  WARNING: sample set violates the domain or spacing constraint!")

    return points


def run_progressive(sampler):
    """Generate a few samples per frame so the window stays responsive."""
    import poisson_disk_viz as viz

    viz.open_window()
    if len(sampler) == 0:
        sampler.add_random_point()

    done = False
    while not viz.should_close():
        if not done:
            for _ in range(C.POINTS_PER_FRAME):
                if sampler.next() is None:
                    done = True
                    print(f"[RUN] Saturated with {len(sampler)} samples - press ESC to close")
                    break

        viz.render_frame(sampler.get_all_points(), C.WIDTH, C.HEIGHT,
                         active=sampler.get_active_points())

    return sampler.get_all_points()


def main():
    """
    Main entry point for the demo.

    Steps:
        1. Build the sampler from config
        2. Fill (blocking) or animate (progressive)
    """
    C.VERBOSE = True

    print("\n" + "="*60)
    print("Fast Poisson-Disk Sampling")
    print("="*60)
    print(f"Domain: {C.WIDTH} × {C.HEIGHT}")
    print(f"Radius: {C.RADIUS}  Tries: {C.TRIES}  Seed: {C.SEED}")
    print(f"Mode: {C.RUN_MODE}")
    print("="*60 + "\n")

    sampler = build_sampler()
    print(f"[RUN] Grid: {sampler.grid.cols} × {sampler.grid.rows} cells "
          f"(cell size {sampler.cell_size:.4f})")

    if C.RUN_MODE == "fill":
        run_fill(sampler)
    elif C.RUN_MODE == "progressive":
        run_progressive(sampler)
    else:
        raise ValueError(f"Unknown RUN_MODE: {C.RUN_MODE}")

    print("\nDone.")


if __name__ == "__main__":
    main()
