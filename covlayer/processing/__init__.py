"""
Coverage processing: derived copies, subsetting and palette extents
"""

from .transform import with_parameters, with_categories, masked_by_polygon
from .subset import subset_by_index, subset_by_value, value_at, in_domain_bbox
from .extent import compute_palette_extent, enlarge_extent_if_equal, merge_extents

__all__ = [
    'with_parameters', 'with_categories', 'masked_by_polygon',
    'subset_by_index', 'subset_by_value', 'value_at', 'in_domain_bbox',
    'compute_palette_extent', 'enlarge_extent_if_equal', 'merge_extents'
]
