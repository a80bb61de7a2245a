"""
Coverage data structures backed by numpy masked arrays
"""

from typing import Optional, Dict, Any, Tuple, Sequence, Mapping
from dataclasses import dataclass, field

import numpy as np

# Marker for "no value" in range buffers and reductions. Distinct from NaN
# and from numeric zero.
MISSING = None

# Axis names of the horizontal plane, in domain order
X_AXIS = "x"
Y_AXIS = "y"
Z_AXIS = "z"
T_AXIS = "t"

@dataclass(frozen=True)
class Unit:
    """Unit of measure of a parameter"""
    id: Optional[str] = None
    symbol: Optional[str] = None
    label: Optional[str] = None

@dataclass(frozen=True)
class Category:
    """A single class of a categorical parameter"""
    id: Optional[str] = None
    label: Optional[str] = None
    preferred_color: Optional[str] = None

@dataclass(frozen=True)
class ObservedProperty:
    """The phenomenon a parameter measures"""
    id: Optional[str] = None
    label: Optional[str] = None
    categories: Optional[Tuple[Category, ...]] = None

@dataclass(frozen=True)
class Parameter:
    """
    Description of what a data layer measures

    ``categories`` falls back to the observed property's categories, which
    is where CoverageJSON documents declare them.
    """
    key: Optional[str] = None
    observed_property: ObservedProperty = field(default_factory=ObservedProperty)
    unit: Optional[Unit] = None
    categories: Optional[Tuple[Category, ...]] = None
    id: Optional[str] = None
    description: Optional[str] = None

    # category id -> encoded integer values
    category_encoding: Optional[Mapping[str, Tuple[int, ...]]] = field(default=None, compare=False)
    preferred_palette: Optional[Mapping[str, Any]] = field(default=None, compare=False)

    def __post_init__(self):
        if self.categories is None and self.observed_property.categories is not None:
            object.__setattr__(self, 'categories', self.observed_property.categories)
        elif self.categories is not None and not isinstance(self.categories, tuple):
            object.__setattr__(self, 'categories', tuple(self.categories))

    @property
    def is_categorical(self) -> bool:
        return self.categories is not None

@dataclass
class Axis:
    """One coordinate axis of a domain"""
    name: str
    values: np.ndarray

    def __post_init__(self):
        self.values = np.asarray(self.values)
        if self.values.ndim != 1:
            raise ValueError(f"Axis '{self.name}' must be one-dimensional, got shape {self.values.shape}")

    def __len__(self) -> int:
        return len(self.values)

    @property
    def ascending(self) -> bool:
        return len(self.values) < 2 or self.values[0] < self.values[1]

@dataclass
class CompositeAxis:
    """
    Axis whose values are coordinate tuples, e.g. the (t, x, y) points of
    a trajectory

    Each coordinate is stored as its own 1-D array along the axis.
    """
    name: str
    coordinates: Tuple[str, ...]
    components: Dict[str, np.ndarray]

    def __post_init__(self):
        self.coordinates = tuple(self.coordinates)
        self.components = {coord: np.asarray(self.components[coord]) for coord in self.coordinates}
        sizes = {len(values) for values in self.components.values()}
        if len(sizes) > 1:
            raise ValueError(f"Composite axis '{self.name}' has components of different lengths")

    def __len__(self) -> int:
        return len(self.components[self.coordinates[0]]) if self.coordinates else 0

    def component(self, coord: str) -> np.ndarray:
        if coord not in self.components:
            raise KeyError(f"Composite axis '{self.name}' has no '{coord}' coordinate")
        return self.components[coord]

    def sliced(self, index: slice) -> 'CompositeAxis':
        return CompositeAxis(self.name, self.coordinates,
                             {coord: values[index] for coord, values in self.components.items()})

@dataclass
class Domain:
    """
    Spatiotemporal domain of a coverage

    Parameters
    ----------
    domain_type : str
        Domain type name, e.g. 'Grid', 'PointSeries', 'VerticalProfile'
    axes : dict
        Axis name -> Axis
    referencing : sequence of dict
        Referencing entries, each with 'coordinates' and 'system' keys
    composite_axes : dict
        Axis name -> CompositeAxis, for tuple-valued axes like trajectories
    """
    domain_type: str
    axes: Dict[str, Axis] = field(default_factory=dict)
    referencing: Sequence[Mapping[str, Any]] = ()
    composite_axes: Dict[str, CompositeAxis] = field(default_factory=dict)

    def has_axis(self, name: str) -> bool:
        return name in self.axes

    def axis_values(self, name: str) -> np.ndarray:
        """Values of the named axis, raising KeyError if absent"""
        if name not in self.axes:
            raise KeyError(f"Domain has no '{name}' axis")
        return self.axes[name].values

    def axis_length(self, name: str) -> int:
        """Length of a plain or composite axis"""
        if name in self.axes:
            return len(self.axes[name])
        if name in self.composite_axes:
            return len(self.composite_axes[name])
        raise KeyError(f"Domain has no '{name}' axis")

    def coordinate_values(self, coord: str) -> np.ndarray:
        """
        All values of a coordinate, taken from the plain axis of that name
        or from the composite axis that carries it
        """
        if coord in self.axes:
            return self.axes[coord].values
        for composite in self.composite_axes.values():
            if coord in composite.components:
                return composite.components[coord]
        raise KeyError(f"Domain has no '{coord}' coordinate")

    @property
    def x(self) -> Optional[np.ndarray]:
        return self.axes[X_AXIS].values if X_AXIS in self.axes else None

    @property
    def y(self) -> Optional[np.ndarray]:
        return self.axes[Y_AXIS].values if Y_AXIS in self.axes else None

    @property
    def z(self) -> Optional[np.ndarray]:
        return self.axes[Z_AXIS].values if Z_AXIS in self.axes else None

    @property
    def t(self) -> Optional[np.ndarray]:
        return self.axes[T_AXIS].values if T_AXIS in self.axes else None

    @property
    def is_grid(self) -> bool:
        return self.domain_type.endswith('Grid')

    def bbox(self) -> Tuple[float, float, float, float]:
        """
        Horizontal bounding box (xmin, ymin, xmax, ymax) spanned by the
        x and y axis values
        """
        x = self.coordinate_values(X_AXIS)
        y = self.coordinate_values(Y_AXIS)
        return (float(np.min(x)), float(np.min(y)), float(np.max(x)), float(np.max(y)))

class Range:
    """
    Range values of one parameter

    Values are kept in a numpy masked array whose dimensions are ordered as
    ``axis_names``. Masked entries are missing.
    """

    def __init__(self,
                 values: Any,
                 axis_names: Sequence[str],
                 valid_min: Optional[float] = None,
                 valid_max: Optional[float] = None):
        self.values = as_masked(values)
        self.axis_names = tuple(axis_names)
        self.valid_min = valid_min
        self.valid_max = valid_max

        if self.values.ndim != len(self.axis_names):
            raise ValueError(f"Range has {self.values.ndim} dimensions "
                             f"but {len(self.axis_names)} axis names")

    @property
    def shape(self) -> Dict[str, int]:
        """Axis name -> size"""
        return dict(zip(self.axis_names, self.values.shape))

    def get(self, *args: int, **indices: int) -> Any:
        """
        Value at the given indices, or MISSING

        Indices are given either positionally in ``axis_names`` order or by
        axis name. Axes that are not named default to index 0.
        """
        if args:
            if indices:
                raise TypeError("Use either positional or named indices, not both")
            idx = tuple(args)
        else:
            unknown = set(indices) - set(self.axis_names)
            if unknown:
                raise KeyError(f"Unknown axes: {sorted(unknown)}")
            idx = tuple(indices.get(name, 0) for name in self.axis_names)

        value = self.values[idx]
        if value is np.ma.masked:
            return MISSING
        return value.item() if hasattr(value, 'item') else value

    def with_values(self, values: Any) -> 'Range':
        """New Range sharing everything but the values"""
        return Range(values, self.axis_names, self.valid_min, self.valid_max)

    def __repr__(self):
        return f"Range(axis_names={self.axis_names}, shape={self.values.shape})"

@dataclass
class Coverage:
    """
    A domain together with the parameters measured on it and their values
    """
    domain: Domain
    parameters: Dict[str, Parameter] = field(default_factory=dict)
    ranges: Dict[str, Range] = field(default_factory=dict)
    id: Optional[str] = None

    @property
    def domain_type(self) -> str:
        return self.domain.domain_type

    def get_range(self, key: str) -> Range:
        if key not in self.ranges:
            raise KeyError(f"Coverage has no range for parameter '{key}'")
        return self.ranges[key]

    def get_parameter(self, key: str) -> Parameter:
        if key not in self.parameters:
            raise KeyError(f"Coverage has no parameter '{key}'")
        return self.parameters[key]

# Utility functions

def as_masked(values: Any) -> np.ma.MaskedArray:
    """
    Convert a buffer to a numpy masked array

    ``None`` entries in plain sequences become masked entries. NaN is kept as
    a value. Masked arrays are returned unchanged.

    Parameters
    ----------
    values : array_like or MaskedArray
        Input buffer

    Returns
    -------
    MaskedArray
        Buffer with missing entries masked
    """
    if isinstance(values, np.ma.MaskedArray):
        return values

    arr = np.asarray(values)
    if arr.dtype != object:
        return np.ma.MaskedArray(arr, mask=np.zeros(arr.shape, dtype=bool))

    mask = np.asarray(np.frompyfunc(lambda v: v is None, 1, 1)(arr)).astype(bool)
    filled = np.where(mask, 0, arr)
    try:
        filled = filled.astype(float)
    except (TypeError, ValueError):
        pass
    return np.ma.MaskedArray(filled, mask=mask)
