"""
Locate the points of a new grid inside an old grid.

Both grids must be sorted in increasing order, which lets a single forward
scan find every point. Comparing floating point frequencies needs a
tolerance; 1 Hz is on the safe side for the frequency grids of lookup
tables.
"""

import logging

import numpy as np

from abs_lookup.errors import GridPointNotFound
from abs_lookup.utils.constants import FREQUENCY_TOLERANCE

logger = logging.getLogger(__name__)


def find_new_grid_in_old_grid(
    old_grid: np.ndarray,
    new_grid: np.ndarray,
    tolerance: float = FREQUENCY_TOLERANCE,
) -> np.ndarray:
    """
    Find positions of new grid points in old grid.

    Parameters
    ----------
    old_grid : array_like
        Increasing grid to search in, shape (m,)
    new_grid : array_like
        Increasing grid of points to locate, shape (n,)
    tolerance : float
        Maximum allowed distance between matched points, in grid units

    Returns
    -------
    pos : ndarray of int
        Index into ``old_grid`` for every point of ``new_grid``, shape (n,)

    Raises
    ------
    GridPointNotFound
        If a new grid point has no old grid point within ``tolerance``
    """
    old_grid = np.asarray(old_grid, dtype=float)
    new_grid = np.asarray(new_grid, dtype=float)

    n_old = len(old_grid)
    pos = np.empty(len(new_grid), dtype=np.int64)

    j = 0
    for i, value in enumerate(new_grid):
        while j < n_old and abs(value - old_grid[j]) > tolerance:
            j += 1
        if j >= n_old:
            raise GridPointNotFound(i, float(value), tolerance)

        pos[i] = j
        logger.debug(f"    {value} found, index = {j}")

    return pos
