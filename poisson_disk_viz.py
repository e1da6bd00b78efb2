"""
Visualization: Taichi GUI Window
2D preview of samples and the active process list
"""

import numpy as np
import taichi as ti
import poisson_disk_config as C
import poisson_disk_state  # Initialize Taichi before opening a window

# =============================================================================
# GUI Setup
# =============================================================================

# Window is created on first use so importing this module stays headless
gui = None


def open_window(title="Poisson Disk Sampling"):
    """Create the preview window (once)."""
    global gui
    if gui is None:
        gui = ti.GUI(title, res=C.WINDOW_RES, background_color=C.BACKGROUND)
    return gui


# =============================================================================
# Coordinate Mapping
# =============================================================================

def to_canvas(points, width, height):
    """
    Map domain coordinates into the GUI's unit square.

    Both axes are divided by the larger side, so the domain keeps its aspect
    ratio and sits in the lower-left corner of the canvas.

    Args:
        points: (N, 2) array-like of domain coordinates
        width, height: domain extent

    Returns:
        (N, 2) float32 array in [0, 1]²
    """
    pts = np.array(points, dtype=np.float64).reshape(-1, 2)
    return (pts / max(width, height)).astype(np.float32)


# =============================================================================
# Rendering
# =============================================================================

def render_frame(points, width, height, active=None):
    """
    Render one frame.

    Args:
        points: accepted samples
        width, height: domain extent
        active: optional active-point coordinates, drawn on top
    """
    window = open_window()

    pts = to_canvas(points, width, height)
    if len(pts):
        window.circles(pts, radius=C.POINT_PIXELS, color=C.POINT_COLOR)

    if active is not None:
        act = to_canvas(active, width, height)
        if len(act):
            window.circles(act, radius=C.POINT_PIXELS + 1.0, color=C.ACTIVE_COLOR)

    window.text(f"samples: {len(pts)}", pos=(0.02, 0.98), color=0xFFFFFF)
    window.show()


def should_close():
    """Check if window should close."""
    if gui is None:
        return False
    if gui.get_event(ti.GUI.ESCAPE):
        return True
    return not gui.running
