"""
Point-in-polygon tests for spatial masking

Uses the even-odd (PNPOLY) ray casting rule: a point is inside if a
horizontal ray towards +x crosses an odd number of edges. Points exactly on
an edge may be reported inside or outside depending on the edge
orientation; this is inherent to the rule. Polygon and points must share
the same CRS and longitudes must be wrapped to a common range.
"""

from typing import Any, List

import numpy as np

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.number))

def polygon_rings(polygon: Any) -> List[List[np.ndarray]]:
    """
    Normalize a polygon description to a list of polygons, each a list of
    rings given as (n, 2) arrays

    Accepted inputs are a single ring ``[[x, y], ...]``, a list of rings
    (outer ring first, then holes), a list of such polygons, or a GeoJSON
    Polygon / MultiPolygon mapping.
    """
    if isinstance(polygon, dict):
        geom_type = polygon.get('type')
        coords = polygon.get('coordinates')
        if geom_type == 'Polygon':
            polygons = [coords]
        elif geom_type == 'MultiPolygon':
            polygons = coords
        else:
            raise ValueError(f"Unsupported geometry type: {geom_type}")
    else:
        if len(polygon) == 0 or len(polygon[0]) == 0:
            raise ValueError("Polygon must have at least one ring")
        first = polygon[0][0]
        if _is_number(first):
            polygons = [[polygon]]
        elif _is_number(first[0]):
            polygons = [polygon]
        else:
            polygons = polygon

    result = []
    for rings in polygons:
        arrs = []
        for ring in rings:
            arr = np.asarray(ring, dtype=float)
            if arr.ndim != 2 or arr.shape[1] < 2:
                raise ValueError(f"Ring must be a sequence of (x, y) pairs, got shape {arr.shape}")
            if len(arr) < 3:
                raise ValueError("Ring must have at least three vertices")
            arrs.append(arr[:, :2])
        result.append(arrs)
    return result

def _crossings(xs: np.ndarray, ys: np.ndarray, rings: List[np.ndarray]) -> np.ndarray:
    inside = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
    for ring in rings:
        vx = ring[:, 0]
        vy = ring[:, 1]
        n = len(ring)
        j = n - 1
        for i in range(n):
            xi, yi, xj, yj = vx[i], vy[i], vx[j], vy[j]
            straddles = (yi > ys) != (yj > ys)
            if yj != yi:
                x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
                inside ^= straddles & (xs < x_cross)
            j = i
    return inside

def points_in_polygon(xs: Any, ys: Any, polygon: Any) -> np.ndarray:
    """
    Vectorized point-in-polygon test

    Parameters
    ----------
    xs, ys : array_like
        Point coordinates, broadcast against each other
    polygon : ring, rings, polygons or GeoJSON mapping
        See ``polygon_rings``

    Returns
    -------
    ndarray of bool
        True where the point lies inside any of the polygons
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    result = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
    for rings in polygon_rings(polygon):
        result |= _crossings(xs, ys, rings)
    return result

def point_in_polygon(x: float, y: float, polygon: Any) -> bool:
    """
    True if (x, y) lies inside the polygon

    >>> point_in_polygon(1.5, 15, [[1, 10], [2, 10], [2, 20], [1, 20]])
    True
    """
    return bool(points_in_polygon(x, y, polygon))
