"""
Reductions over range buffers that skip missing entries
"""

from typing import Any, Optional, Tuple, Union

import numpy as np

from ..core.datatypes import MISSING, as_masked

Index = Union[int, Tuple[int, ...]]

def _null_arg(values: Any, op: str) -> Optional[Index]:
    arr = as_masked(values)
    data = np.ma.getdata(arr)
    skip = np.ma.getmaskarray(arr)
    if np.issubdtype(data.dtype, np.floating):
        # NaN never compares as a better value
        skip = skip | np.isnan(data)

    if arr.size == 0 or skip.all():
        return MISSING

    valid = np.flatnonzero(~skip)
    candidates = data.ravel()[valid]
    # argmin/argmax return the first occurrence on ties
    pos = candidates.argmin() if op == 'min' else candidates.argmax()
    flat = int(valid[pos])

    if arr.ndim <= 1:
        return flat
    return tuple(int(i) for i in np.unravel_index(flat, arr.shape))

def null_argmin(values: Any) -> Optional[Index]:
    """
    Index of the smallest non-missing value

    Parameters
    ----------
    values : array_like or MaskedArray
        Buffer where ``None`` or masked entries are missing

    Returns
    -------
    int, tuple of int or MISSING
        Flat index for 1-D buffers, index tuple for n-D buffers. MISSING if
        the buffer holds no values.
    """
    return _null_arg(values, 'min')

def null_argmax(values: Any) -> Optional[Index]:
    """Index of the largest non-missing value, see ``null_argmin``"""
    return _null_arg(values, 'max')

def min_max(values: Any) -> Optional[Tuple[Any, Any]]:
    """
    Smallest and largest non-missing values

    Returns MISSING if the buffer holds no values.
    """
    arr = as_masked(values)
    imin = null_argmin(arr)
    if imin is MISSING:
        return MISSING
    imax = null_argmax(arr)
    return np.ma.getdata(arr)[imin].item(), np.ma.getdata(arr)[imax].item()
