"""
Palette extent computation for legends and color scales
"""

from typing import Optional, Sequence, Tuple
import logging

from ..core.config import ExtentConfig
from ..core.datatypes import Range, MISSING, X_AXIS, Y_AXIS
from ..algorithms.reduce import min_max

logger = logging.getLogger(__name__)

Extent = Tuple[float, float]

def enlarge_extent_if_equal(extent: Sequence[float], amount: float = 0.1) -> Extent:
    """
    Widen a zero-width extent by ``amount`` of its value on each side

    Other extents are returned unchanged.
    """
    lo, hi = extent
    if lo == hi:
        buffer = lo * amount
        return (lo - buffer, hi + buffer)
    return (lo, hi)

def merge_extents(e1: Optional[Sequence[float]], e2: Optional[Sequence[float]]) -> Optional[Extent]:
    """
    Union of two extents, or None if either is missing

    Suitable as the ``palette_extent`` merge function of a ParameterReconciler.
    """
    if e1 is None or e2 is None:
        return None
    return (min(e1[0], e2[0]), max(e1[1], e2[1]))

def _sample_step(size: int, target: int) -> int:
    return max(int(round(size / target)), 1)

def compute_palette_extent(rng: Range,
                           mode: str = 'full',
                           config: Optional[ExtentConfig] = None) -> Extent:
    """
    Compute the palette extent of a range

    Parameters
    ----------
    rng : Range
        Range values, typically already subset to one time/vertical slice
    mode : str
        'full' scans every value. 'subset' scans every value unless the
        horizontal size exceeds ``config.max_exact_extent_cells``, in which
        case a strided sample is scanned and the result is widened by
        ``config.estimate_buffer`` on each side.
    config : ExtentConfig, optional
        Tuning parameters

    Returns
    -------
    tuple of float
        (min, max)
    """
    config = config or ExtentConfig()
    if mode not in ('full', 'subset'):
        raise ValueError(f"Unknown extent specification: {mode}")

    values = rng.values
    shape = rng.shape
    nx = shape.get(X_AXIS, 1)
    ny = shape.get(Y_AXIS, 1)
    estimate = mode == 'subset' and nx * ny >= config.max_exact_extent_cells

    if estimate:
        index = []
        for name in rng.axis_names:
            if name in (X_AXIS, Y_AXIS):
                index.append(slice(None, None, _sample_step(shape[name], config.sample_target)))
            else:
                index.append(slice(None))
        values = values[tuple(index)]

    extent = min_max(values)
    if extent is MISSING:
        raise ValueError("Cannot compute a palette extent, range has no values")

    if estimate:
        lo, hi = extent
        buffer = (hi - lo) * config.estimate_buffer
        logger.warning("Palette extent estimated from a %s sample of %dx%d cells",
                       values.shape, nx, ny)
        return (lo - buffer, hi + buffer)

    return enlarge_extent_if_equal(extent, config.enlarge_amount)
