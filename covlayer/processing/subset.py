"""
Axis subsetting and point value lookup

Layers fix the time and vertical axes of a coverage to single slices
chosen from a preferred coordinate, which need not exactly match an axis
value. The nearest axis value is used.
"""

from typing import Any, Dict, Mapping, Optional, Union
from datetime import datetime, date
import dataclasses
import logging

import numpy as np

from ..core.datatypes import Axis, Coverage, Range, MISSING, X_AXIS, Y_AXIS
from ..algorithms.search import index_of_nearest

logger = logging.getLogger(__name__)

IndexConstraint = Union[int, slice]

def as_axis_value(values: np.ndarray, target: Any) -> Any:
    """
    Convert a query value to the type of the axis values

    Datetime axes accept ISO strings, ``datetime`` and ``date`` objects.
    """
    if np.issubdtype(values.dtype, np.datetime64):
        if isinstance(target, np.datetime64):
            return target.astype(values.dtype)
        if isinstance(target, str) and target.endswith('Z'):
            target = target[:-1]
        if isinstance(target, (str, datetime, date)):
            return np.datetime64(target).astype(values.dtype)
    return target

def _subset_range(rng: Range, index: Dict[str, slice]) -> Range:
    idx = tuple(index.get(name, slice(None)) for name in rng.axis_names)
    return rng.with_values(rng.values[idx].copy())

def subset_by_index(cov: Coverage, constraints: Mapping[str, IndexConstraint]) -> Coverage:
    """
    Subset a coverage by axis indices

    Parameters
    ----------
    cov : Coverage
        Source coverage, left unchanged
    constraints : dict
        Axis name -> index or slice. An integer keeps a single slice and the
        axis stays in the domain with length 1. Composite axes are sliced
        along with all their coordinates. Axes not in the domain are
        skipped.

    Returns
    -------
    Coverage
        New coverage with sliced axes and ranges
    """
    index = {}
    axes = dict(cov.domain.axes)
    composite_axes = dict(cov.domain.composite_axes)
    for name, constraint in constraints.items():
        if name not in axes and name not in composite_axes:
            logger.debug("Skipping constraint on missing axis '%s'", name)
            continue
        if isinstance(constraint, (int, np.integer)):
            n = cov.domain.axis_length(name)
            i = int(constraint)
            if not -n <= i < n:
                raise IndexError(f"Index {i} out of bounds for axis '{name}' of length {n}")
            i %= n
            constraint = slice(i, i + 1)
        index[name] = constraint
        if name in axes:
            axes[name] = Axis(name, axes[name].values[constraint])
        else:
            composite_axes[name] = composite_axes[name].sliced(constraint)

    domain = dataclasses.replace(cov.domain, axes=axes, composite_axes=composite_axes)
    ranges = {key: _subset_range(rng, index) for key, rng in cov.ranges.items()}
    return dataclasses.replace(cov, domain=domain, ranges=ranges)

def subset_by_value(cov: Coverage, targets: Mapping[str, Any]) -> Coverage:
    """
    Fix axes to the slice nearest to the given coordinates

    Parameters
    ----------
    cov : Coverage
        Source coverage, left unchanged
    targets : dict
        Axis name -> preferred coordinate. ``None`` selects the first axis
        value. Axes not in the domain are skipped.

    Returns
    -------
    Coverage
        Coverage with each targeted axis reduced to one value
    """
    constraints = {}
    for name, target in targets.items():
        if not cov.domain.has_axis(name):
            continue
        values = cov.domain.axis_values(name)
        if target is None:
            constraints[name] = 0
        else:
            constraints[name] = index_of_nearest(values, as_axis_value(values, target))
    return subset_by_index(cov, constraints)

def in_domain_bbox(cov: Coverage, x: float, y: float) -> bool:
    """True if (x, y) lies within the horizontal bounding box of the domain"""
    xmin, ymin, xmax, ymax = cov.domain.bbox()
    return xmin <= x <= xmax and ymin <= y <= ymax

def value_at(cov: Coverage, key: str, x: float, y: float) -> Optional[Any]:
    """
    Value of parameter ``key`` at the grid cell nearest to (x, y)

    No extrapolation is done: positions outside the domain bounding box
    yield MISSING, as do missing cells. Use ``in_domain_bbox`` to tell the
    two apart. All non-horizontal axes of the range must have length 1,
    e.g. after ``subset_by_value``.
    """
    rng = cov.get_range(key)
    if not in_domain_bbox(cov, x, y):
        return MISSING

    extra = {name: size for name, size in rng.shape.items()
             if name not in (X_AXIS, Y_AXIS) and size != 1}
    if extra:
        raise ValueError(f"Range '{key}' must be subset to single slices first, "
                         f"remaining axes: {extra}")

    ix = index_of_nearest(cov.domain.axis_values(X_AXIS), x)
    iy = index_of_nearest(cov.domain.axis_values(Y_AXIS), y)
    indices = {name: i for name, i in ((X_AXIS, ix), (Y_AXIS, iy)) if name in rng.axis_names}
    return rng.get(**indices)
