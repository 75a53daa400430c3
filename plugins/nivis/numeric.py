"""
Finite-difference helpers on 2D grids.

Arrays are indexed [j, i] (row = y, column = x). Derivatives use central
differences on the interior; the outermost ring of cells is left at zero.
"""

import numpy as np


def new_array_with_function(nx, ny, dx, dy, func):
    """Sample func(x, y) on an nx-by-ny grid with spacing (dx, dy).

    Returns an array of shape (ny, nx) where element [j, i] holds
    func(i * dx, j * dy).
    """
    x = np.arange(nx, dtype=np.float32) * np.float32(dx)
    y = np.arange(ny, dtype=np.float32) * np.float32(dy)
    X, Y = np.meshgrid(x, y)
    return np.asarray(func(X, Y), dtype=np.float32)


def atan2(y, x):
    """Element-wise four-quadrant arctangent of y / x."""
    return np.arctan2(y, x)


def diff_x(array, dx):
    """Central first derivative along x."""
    out = np.zeros_like(array)
    out[1:-1, 1:-1] = (array[1:-1, 2:] - array[1:-1, :-2]) / (2.0 * dx)
    return out


def diff_y(array, dy):
    """Central first derivative along y."""
    out = np.zeros_like(array)
    out[1:-1, 1:-1] = (array[2:, 1:-1] - array[:-2, 1:-1]) / (2.0 * dy)
    return out


def laplace(array, dx, dy):
    """5-point laplacian with separate x/y spacing."""
    out = np.zeros_like(array)
    center = array[1:-1, 1:-1]
    ddx = (array[1:-1, 2:] - 2.0 * center + array[1:-1, :-2]) / (dx * dx)
    ddy = (array[2:, 1:-1] - 2.0 * center + array[:-2, 1:-1]) / (dy * dy)
    out[1:-1, 1:-1] = ddx + ddy
    return out
