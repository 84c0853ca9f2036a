"""
Numba-accelerated weighted sums used by the extractor.

Each kernel applies the same interpolation weights to every selected
frequency at once. All output buffers are allocated per call, so the
kernels are safe to run from many threads against the same table.
"""

import numpy as np
from numba import jit


@jit(nopython=True, cache=True)
def weighted_sum_1d(
    weights: np.ndarray,
    indices: np.ndarray,
    block: np.ndarray,
) -> np.ndarray:
    """1D interpolation over the leading axis of a block.

    Args:
        weights: Interpolation weights, shape (n_w,)
        indices: Indices into the leading axis of ``block``, shape (n_w,)
        block: Coefficients, shape (n_axis, n_freq)

    Returns:
        Interpolated values, shape (n_freq,)
    """
    n_freq = block.shape[1]
    result = np.zeros(n_freq)
    for r in range(len(weights)):
        w = weights[r]
        row = indices[r]
        for f in range(n_freq):
            result[f] += w * block[row, f]
    return result


@jit(nopython=True, cache=True)
def weighted_sum_2d(
    weights: np.ndarray,
    row_indices: np.ndarray,
    col_indices: np.ndarray,
    block: np.ndarray,
) -> np.ndarray:
    """2D interpolation over the two leading axes of a block.

    Args:
        weights: Tensor product weights, shape (n_rows, n_cols)
        row_indices: Indices into the first axis of ``block``, shape (n_rows,)
        col_indices: Indices into the second axis of ``block``, shape (n_cols,)
        block: Coefficients, shape (n_axis_1, n_axis_2, n_freq)

    Returns:
        Interpolated values, shape (n_freq,)
    """
    n_freq = block.shape[2]
    result = np.zeros(n_freq)
    for r in range(weights.shape[0]):
        row = row_indices[r]
        for c in range(weights.shape[1]):
            w = weights[r, c]
            col = col_indices[c]
            for f in range(n_freq):
                result[f] += w * block[row, col, f]
    return result
