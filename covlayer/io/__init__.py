"""
Reading coverages from CoverageJSON and xarray
"""

from .covjson import load, read
from .xarray_io import to_xarray, from_xarray

__all__ = [
    'load', 'read',
    'to_xarray', 'from_xarray'
]
