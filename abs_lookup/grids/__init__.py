"""
Grid utilities.

Functions
---------
find_new_grid_in_old_grid
    Map a sorted grid onto positions in another sorted grid
gridpos_poly
    Polynomial interpolation stencil and weights for one value
extended_range
    Grid range extended by half a bin at each end
"""

from abs_lookup.grids.locator import find_new_grid_in_old_grid
from abs_lookup.grids.polynomial import (
    PolynomialGridPosition,
    extended_range,
    gridpos_poly,
    interpolation_weights_2d,
    is_strictly_decreasing,
    is_strictly_increasing,
    lagrange_weights,
)

__all__ = [
    "find_new_grid_in_old_grid",
    "PolynomialGridPosition",
    "extended_range",
    "gridpos_poly",
    "interpolation_weights_2d",
    "is_strictly_decreasing",
    "is_strictly_increasing",
    "lagrange_weights",
]
