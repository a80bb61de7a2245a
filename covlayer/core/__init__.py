"""
Core coverage data model, events and configuration
"""

from .datatypes import (
    MISSING, Unit, Category, ObservedProperty, Parameter,
    Axis, CompositeAxis, Domain, Range, Coverage, as_masked,
)
from .events import Event, EventEmitter
from .config import ExtentConfig, SyncConfig

__all__ = [
    'MISSING', 'Unit', 'Category', 'ObservedProperty', 'Parameter',
    'Axis', 'CompositeAxis', 'Domain', 'Range', 'Coverage', 'as_masked',
    'Event', 'EventEmitter',
    'ExtentConfig', 'SyncConfig'
]
