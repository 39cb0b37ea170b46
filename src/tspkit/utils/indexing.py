"""Index arithmetic for the compact encoding of a strict upper triangular matrix.

The strict upper triangle of an ``n x n`` matrix holds the ``n(n-1)/2`` entries ``(i, j)`` with
``0 <= i < j < n``. The compact array lists them row by row::

    k:      0      1      2      3      4      5
    (i,j):  (0,1)  (0,2)  (0,3)  (1,2)  (1,3)  (2,3)      # n = 4

Both helpers are pure and do not validate their arguments: outside the documented ranges the
returned value is meaningless. Callers check bounds themselves.
"""
import math
from typing import Tuple


def compact_length(n: int) -> int:
    """Number of entries in the strict upper triangle of an ``n x n`` matrix."""
    return n * (n - 1) // 2 if n > 1 else 0


def to_index(i: int, j: int, n: int) -> int:
    """
    Map matrix coordinates to the position inside the compact array.

    Args:
        i: 0-based row, ``0 <= i < j``
        j: 0-based column, ``j < n``
        n: matrix dimension

    Returns:
        The compact array index ``k`` in ``[0, n(n-1)/2)``.
    """
    # [n + (n-1) + ... + (n-i) - n] + (j-i-1)
    return n * (n - 1) // 2 - (n - i) * (n - i - 1) // 2 + (j - i - 1)


def to_coords(k: int, n: int) -> Tuple[int, int]:
    """
    Inverse of :func:`to_index`.

    Args:
        k: compact array index, ``0 <= k < n(n-1)/2``
        n: matrix dimension

    Returns:
        The ``(i, j)`` coordinates of the entry stored at ``k``.
    """
    if k < n - 1:
        return 0, k + 1

    i = math.floor(n - 0.5 - math.sqrt((2 * n - 1) ** 2 - 8 * k) / 2)
    row_start = n * i - i * (i + 1) // 2
    return i, i + 1 + (k - row_start)
