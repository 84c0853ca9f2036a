"""
Polynomial (Lagrange) interpolation on irregular grids.

The lookup table interpolates along at most three axes at a time, each with
its own order. For order ``n`` the ``n + 1`` grid points closest to the
target are used: even-sized stencils bracket the target, odd-sized stencils
are centred on the nearest node. Near the grid ends the stencil is shifted
inwards, so a target slightly outside the grid is extrapolated from the
outermost points.

Grids may be increasing or decreasing (the log-pressure grid decreases).
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from abs_lookup.errors import InsufficientGridForOrder


@dataclass(frozen=True)
class PolynomialGridPosition:
    """
    Position of a value in a grid, for polynomial interpolation.

    Attributes
    ----------
    indices : ndarray of int
        Grid indices of the interpolation stencil, shape (order + 1,)
    weights : ndarray
        Lagrange weights belonging to ``indices``, shape (order + 1,)
    """

    indices: np.ndarray
    weights: np.ndarray

    @property
    def order(self) -> int:
        """Interpolation order."""
        return len(self.indices) - 1


def is_strictly_increasing(grid) -> bool:
    """True if every element is larger than the one before."""
    grid = np.asarray(grid)
    return bool(np.all(np.diff(grid) > 0))


def is_strictly_decreasing(grid) -> bool:
    """True if every element is smaller than the one before."""
    grid = np.asarray(grid)
    return bool(np.all(np.diff(grid) < 0))


def extended_range(grid) -> Tuple[float, float]:
    """
    Range covered by a grid plus half a bin at each end.

    The extension at each end uses the spacing of the two outermost points
    at that end, not a uniform step. A single-point grid has no extension.

    Parameters
    ----------
    grid : array_like
        Monotonic grid (increasing or decreasing)

    Returns
    -------
    (lower, upper) : tuple of float
    """
    g = np.asarray(grid, dtype=float)
    if g[0] > g[-1]:
        g = g[::-1]
    if len(g) < 2:
        return float(g[0]), float(g[0])

    lower = g[0] - 0.5 * (g[1] - g[0])
    upper = g[-1] + 0.5 * (g[-1] - g[-2])
    return float(lower), float(upper)


def lagrange_weights(nodes: np.ndarray, x: float) -> np.ndarray:
    """
    Lagrange basis polynomials of ``nodes`` evaluated at ``x``.

    Weights are exactly one-hot when ``x`` coincides with a node.
    """
    n = len(nodes)
    weights = np.ones(n)
    for j in range(n):
        for k in range(n):
            if k != j:
                weights[j] *= (x - nodes[k]) / (nodes[j] - nodes[k])
    return weights


def gridpos_poly(grid, x: float, order: int, axis: str = "grid") -> PolynomialGridPosition:
    """
    Grid position and interpolation weights for polynomial interpolation.

    Parameters
    ----------
    grid : array_like
        Strictly monotonic grid, shape (n,)
    x : float
        Target value
    order : int
        Interpolation order (0 = nearest neighbour, 1 = linear, ...)
    axis : str
        Axis name used in error messages

    Returns
    -------
    PolynomialGridPosition

    Raises
    ------
    InsufficientGridForOrder
        If the grid has fewer than ``order + 1`` points
    """
    grid = np.asarray(grid, dtype=float)
    n = len(grid)
    m = order + 1

    if order < 0 or m > n:
        raise InsufficientGridForOrder(axis, n, order)

    if n == 1:
        return PolynomialGridPosition(
            indices=np.zeros(1, dtype=np.int64), weights=np.ones(1)
        )

    ascending = grid[-1] > grid[0]
    g = grid if ascending else grid[::-1]

    # Interval [g[i], g[i+1]] containing x, clamped to the grid
    i = int(np.searchsorted(g, x, side="right")) - 1
    i = min(max(i, 0), n - 2)

    if m % 2 == 0:
        start = i - (m // 2 - 1)
    else:
        nearest = i if (x - g[i]) <= (g[i + 1] - x) else i + 1
        start = nearest - m // 2
    start = min(max(start, 0), n - m)

    indices = np.arange(start, start + m, dtype=np.int64)
    if not ascending:
        indices = np.sort(n - 1 - indices)

    weights = lagrange_weights(grid[indices], x)
    return PolynomialGridPosition(indices=indices, weights=weights)


def interpolation_weights_2d(
    first: PolynomialGridPosition, second: PolynomialGridPosition
) -> np.ndarray:
    """
    Weights for a 2D interpolation on the tensor product of two stencils.

    Returns
    -------
    ndarray
        Shape (first.order + 1, second.order + 1)
    """
    return np.outer(first.weights, second.weights)
