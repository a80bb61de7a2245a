"""
Numeric building blocks: axis search, null-aware reductions, polygon tests
"""

from .search import indices_of_nearest, index_of_nearest
from .reduce import null_argmin, null_argmax, min_max
from .geometry import point_in_polygon, points_in_polygon, polygon_rings

__all__ = [
    'indices_of_nearest', 'index_of_nearest',
    'null_argmin', 'null_argmax', 'min_max',
    'point_in_polygon', 'points_in_polygon', 'polygon_rings'
]
