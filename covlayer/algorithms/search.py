"""
Nearest-coordinate lookup on monotonic axes
"""

from typing import Any, Tuple

import numpy as np

def indices_of_nearest(axis: Any, x: Any) -> Tuple[int, int]:
    """
    Indices of the two axis values bracketing ``x``

    The axis must be strictly monotonic, ascending or descending. The
    direction is taken from the first two values.

    Parameters
    ----------
    axis : array_like
        Sorted axis values (numbers or datetime64)
    x : scalar
        Query value of the same type

    Returns
    -------
    tuple of int
        ``(lo, hi)``. Both point to ``x`` if it is an axis value. Both are 0
        if ``x`` lies before the first value and both are ``len(axis) - 1``
        if it lies beyond the last value. Otherwise ``hi == lo + 1``.

    Examples
    --------
    >>> indices_of_nearest([2, 5, 8, 12, 13], 6)
    (1, 2)
    >>> indices_of_nearest([2, 5, 8, 12, 13], 5)
    (1, 1)
    >>> indices_of_nearest([2, 5, 8, 12, 13], 50)
    (4, 4)
    """
    a = np.asarray(axis)
    n = len(a)
    if n == 0:
        raise ValueError("Axis must have at least one element")
    if n > 1 and a[0] == a[1]:
        raise ValueError("Axis must be strictly monotonic")

    if n == 1 or a[0] < a[1]:
        # last index with a[i] <= x
        lo = int(np.searchsorted(a, x, side='right')) - 1
    else:
        # last index with a[i] >= x, searched on the reversed (ascending) view
        lo = n - int(np.searchsorted(a[::-1], x, side='left')) - 1
    hi = lo + 1

    if lo >= 0 and a[lo] == x:
        hi = lo
    if lo == -1:
        lo = hi
    if hi == n:
        hi = lo
    return lo, hi

def _distance(a: Any, b: Any) -> Any:
    if isinstance(a, np.datetime64) or isinstance(b, np.datetime64):
        # timedelta64 differences are signed
        return abs(np.datetime64(b) - np.datetime64(a))
    # unsigned axis dtypes would wrap around on subtraction
    return abs(float(b) - float(a))

def index_of_nearest(axis: Any, x: Any) -> int:
    """
    Index of the axis value closest to ``x``

    If ``x`` is exactly between two values the lower index wins.

    Examples
    --------
    >>> index_of_nearest([2, 5, 8, 12, 13], 6)
    1
    >>> index_of_nearest([2, 5, 8, 12, 13], 7)
    2
    """
    a = np.asarray(axis)
    lo, hi = indices_of_nearest(a, x)
    if _distance(a[lo], x) <= _distance(a[hi], x):
        return lo
    return hi
