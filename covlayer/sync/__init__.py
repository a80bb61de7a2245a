"""
Cross-layer parameter reconciliation
"""

from .matching import default_match
from .reconciler import ParameterReconciler, ParameterGroup, ParameterSource, EventSource

__all__ = [
    'default_match',
    'ParameterReconciler', 'ParameterGroup', 'ParameterSource', 'EventSource'
]
