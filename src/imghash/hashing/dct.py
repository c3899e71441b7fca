"""Unnormalized DCT-II used by the perceptual hash.

For a sequence x_0..x_{N-1} the transform is

    y_k = 2 * sum_{n=0}^{N-1} x_n * cos(pi * k * (2n + 1) / (2N))

which is ``scipy.fftpack.dct(x, type=2, norm=None)``. The 2-D transform is
separable: every column is transformed first, then every row of that
intermediate result. Applying the passes in this order and without any
extra transpose gives dct2_2d(X.T) == dct2_2d(X).T.
"""

from functools import lru_cache

import numpy as np
from numpy.typing import ArrayLike, NDArray


@lru_cache(maxsize=32)
def _cosine_basis(n: int) -> NDArray[np.float64]:
    """Return the (n, n) DCT-II matrix C with y = C @ x."""
    k = np.arange(n, dtype=np.float64)[:, np.newaxis]
    i = np.arange(n, dtype=np.float64)[np.newaxis, :]
    basis = 2.0 * np.cos(np.pi * k * (2.0 * i + 1.0) / (2.0 * n))
    basis.flags.writeable = False
    return basis


def dct2(values: ArrayLike, axis: int = -1) -> NDArray[np.float64]:
    """Apply the 1-D DCT-II along one axis.

    Args:
        values: 1-D sequence or 2-D matrix of numbers
        axis: For a matrix, 0 transforms every column and 1 (or -1) every row

    Returns:
        New float64 array of the same shape; empty input returns empty output
    """
    array = np.asarray(values, dtype=np.float64)
    if array.size == 0:
        return array.copy()

    moved = np.moveaxis(array, axis, -1)
    transformed = moved @ _cosine_basis(moved.shape[-1]).T
    return np.moveaxis(transformed, -1, axis)


def dct2_2d(matrix: ArrayLike) -> NDArray[np.float64]:
    """Apply the separable 2-D DCT-II: columns first, then rows."""
    return dct2(dct2(matrix, axis=0), axis=1)
