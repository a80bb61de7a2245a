"""
Coverage Layer Core
===================

Data-subsetting and cross-layer reconciliation for map layers showing
multi-dimensional scientific coverage data (grids, trajectories, vertical
profiles).

Key Features:
- Nearest-coordinate search on ascending and descending axes
- Argmin/argmax and extents over buffers with missing values
- Point-in-polygon masking of grid coverages
- Non-mutating coverage transforms and axis subsetting
- Grouping of layers by equivalent parameter for shared legends and controls
"""

__version__ = "0.4.0"

# Import main modules
from . import core
from . import algorithms
from . import processing
from . import sync
from . import io

# Convenience imports for common usage
from .core.datatypes import MISSING, Coverage, Domain, Range, Parameter
from .algorithms import (
    indices_of_nearest, index_of_nearest,
    null_argmin, null_argmax,
    point_in_polygon,
)
from .processing import with_parameters, with_categories, masked_by_polygon
from .sync import ParameterReconciler, ParameterGroup, default_match

__all__ = [
    # Modules
    'core', 'algorithms', 'processing', 'sync', 'io',

    # Data model
    'MISSING', 'Coverage', 'Domain', 'Range', 'Parameter',

    # Algorithms
    'indices_of_nearest', 'index_of_nearest',
    'null_argmin', 'null_argmax', 'point_in_polygon',

    # Transforms
    'with_parameters', 'with_categories', 'masked_by_polygon',

    # Reconciliation
    'ParameterReconciler', 'ParameterGroup', 'default_match',
]
