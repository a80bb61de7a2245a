"""
Derived coverage copies

Every function here returns a new Coverage and leaves the input, and
everything reachable from it, untouched. Fields that are not transformed
are shared by reference with the input.
"""

from typing import Any, Dict, Sequence
import dataclasses
import logging

import numpy as np

from ..core.datatypes import Coverage, Parameter, Category, Range, X_AXIS, Y_AXIS
from ..algorithms.geometry import points_in_polygon

logger = logging.getLogger(__name__)

def with_parameters(cov: Coverage, params: Dict[str, Parameter]) -> Coverage:
    """
    Copy of ``cov`` with the parameters replaced by ``params``

    Parameters
    ----------
    cov : Coverage
        Source coverage
    params : dict
        Parameter key -> Parameter

    Returns
    -------
    Coverage
        Shallow copy sharing domain and ranges with ``cov``
    """
    return dataclasses.replace(cov, parameters=params)

def with_categories(cov: Coverage, key: str, categories: Sequence[Category]) -> Coverage:
    """
    Copy of ``cov`` where the categories of parameter ``key`` are replaced

    Sibling parameters are shared by reference. Raises KeyError if ``key``
    is not a parameter of ``cov``.
    """
    if key not in cov.parameters:
        raise KeyError(f"Coverage has no parameter '{key}'")
    params = dict(cov.parameters)
    params[key] = dataclasses.replace(params[key], categories=tuple(categories))
    return with_parameters(cov, params)

def _mask_range(rng: Range, inside: np.ndarray) -> Range:
    names = rng.axis_names
    if X_AXIS not in names or Y_AXIS not in names:
        return rng

    # inside has (y, x) order; bring it to the range's order and broadcast
    iy, ix = names.index(Y_AXIS), names.index(X_AXIS)
    mask2d = ~inside if iy < ix else ~inside.T
    shape = [1] * len(names)
    shape[iy] = rng.values.shape[iy]
    shape[ix] = rng.values.shape[ix]
    outside = mask2d.reshape(shape)

    mask = np.ma.getmaskarray(rng.values) | outside
    values = np.ma.MaskedArray(np.ma.getdata(rng.values), mask=mask, copy=True)
    return rng.with_values(values)

def masked_by_polygon(cov: Coverage, polygon: Any) -> Coverage:
    """
    Copy of ``cov`` whose range values outside ``polygon`` are missing

    Only grid domains are supported. The polygon is tested against the
    x/y grid coordinates and must be in the same CRS.

    Parameters
    ----------
    cov : Coverage
        Grid coverage
    polygon : ring, rings or GeoJSON Polygon/MultiPolygon mapping
        Mask polygon, see ``covlayer.algorithms.geometry.polygon_rings``

    Returns
    -------
    Coverage
        Coverage with eagerly masked copies of all ranges
    """
    if not cov.domain.is_grid:
        raise ValueError(f"Only grids can be masked by polygon, got {cov.domain_type}")

    x = cov.domain.axis_values(X_AXIS)
    y = cov.domain.axis_values(Y_AXIS)
    inside = points_in_polygon(x[np.newaxis, :], y[:, np.newaxis], polygon)
    logger.debug("Polygon mask keeps %d of %d grid cells", int(inside.sum()), inside.size)

    ranges = {key: _mask_range(rng, inside) for key, rng in cov.ranges.items()}
    return dataclasses.replace(cov, ranges=ranges)
