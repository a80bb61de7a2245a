"""
Configuration objects for extent computation and parameter synchronization
"""

from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass, field

@dataclass
class ExtentConfig:
    """Configuration for palette extent computation"""
    enlarge_amount: float = 0.1             # Relative widening of a zero-width extent
    max_exact_extent_cells: int = 1000 * 1000  # Larger x*y subsets are sampled
    sample_target: int = 1000               # Approximate samples per horizontal axis
    estimate_buffer: float = 0.1            # Relative buffer on each side of a sampled extent

    def __post_init__(self):
        if self.max_exact_extent_cells < 1:
            raise ValueError("max_exact_extent_cells must be positive")
        if self.sample_target < 1:
            raise ValueError("sample_target must be positive")

@dataclass
class SyncConfig:
    """
    Configuration for ParameterReconciler

    Parameters
    ----------
    sync_properties : dict
        Property name -> binary merge function. The merged value of a group
        is ``functools.reduce(merge, values)`` over its layers.
    match : callable, optional
        ``(Parameter, Parameter) -> bool``. Defaults to the exact-match
        policy in ``covlayer.sync.matching.default_match``.
    """
    sync_properties: Dict[str, Callable[[Any, Any], Any]] = field(default_factory=dict)
    match: Optional[Callable[[Any, Any], bool]] = None
