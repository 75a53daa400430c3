"""
Colormaps for Field Rendering

Maps float fields to RGBA8 pixels. Each colormap is a (256, 3) uint8
lookup table built from color stops.
"""

import numpy as np


def _interpolate_colors(stops, n=256):
    """
    Build a colormap by interpolating between color stops.

    Args:
        stops: List of (position, (r, g, b)) where position is [0, 1]
        n: Number of entries in the LUT
    """
    positions = np.array([s[0] for s in stops], dtype=np.float64)
    colors = np.array([s[1] for s in stops], dtype=np.float64)
    t = np.linspace(0.0, 1.0, n)

    # Locate the stop interval for each entry, then smoothstep inside it
    idx = np.clip(np.searchsorted(positions, t, side="right") - 1, 0, len(stops) - 2)
    span = positions[idx + 1] - positions[idx]
    frac = np.where(span > 0, (t - positions[idx]) / np.where(span > 0, span, 1.0), 0.0)
    frac = np.clip(frac, 0.0, 1.0)
    frac = frac * frac * (3 - 2 * frac)

    lut = colors[idx] + frac[:, None] * (colors[idx + 1] - colors[idx])
    return lut.astype(np.uint8)


# --- Colormap Definitions ---

def ice():
    """Deep night sky through glacier blue to white ice."""
    return _interpolate_colors([
        (0.00, (4, 8, 20)),
        (0.25, (14, 40, 80)),
        (0.50, (50, 120, 180)),
        (0.75, (150, 210, 240)),
        (1.00, (250, 252, 255)),
    ])


def thermal():
    """Cold blue through black to hot orange and white."""
    return _interpolate_colors([
        (0.00, (40, 90, 220)),
        (0.30, (10, 20, 60)),
        (0.45, (0, 0, 0)),
        (0.70, (200, 60, 10)),
        (0.90, (255, 180, 40)),
        (1.00, (255, 250, 220)),
    ])


COLORMAPS = {
    "ice": ice,
    "thermal": thermal,
}

_cache = {}


def get_colormap(name):
    """Get a colormap LUT by name (cached)."""
    if name not in _cache:
        _cache[name] = COLORMAPS[name]()
    return _cache[name]


def apply_colormap(field, lut, vmin=0.0, vmax=1.0):
    """Map a 2D float field to an (H, W, 4) uint8 RGBA array.

    Values are normalized from [vmin, vmax] onto the LUT; alpha is opaque.
    """
    norm = (np.asarray(field, dtype=np.float32) - vmin) / (vmax - vmin)
    indices = (np.clip(norm, 0.0, 1.0) * (len(lut) - 1)).astype(np.intp)
    h, w = indices.shape
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    rgba[:, :, :3] = lut[indices]
    rgba[:, :, 3] = 255
    return rgba
