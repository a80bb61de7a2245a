"""
CoverageJSON reader

Builds Coverage objects from CoverageJSON documents that are already in
memory or stored in local files. Remote loading is left to the caller.
"""

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union
import logging

import numpy as np

from ..core.datatypes import (
    Axis, Category, CompositeAxis, Coverage, Domain, ObservedProperty, Parameter, Range, Unit,
    as_masked, X_AXIS, Y_AXIS, Z_AXIS, T_AXIS,
)

logger = logging.getLogger(__name__)

# Dimension order of range values when a document does not name it
DEFAULT_AXIS_ORDER = (T_AXIS, Z_AXIS, Y_AXIS, X_AXIS)

def load(filename: Union[str, Path]) -> Coverage:
    """
    Load a CoverageJSON file

    Parameters
    ----------
    filename : str or Path
        Path to a .covjson / .json file

    Returns
    -------
    Coverage
        Parsed coverage
    """
    filename = Path(filename)
    if not filename.exists():
        raise FileNotFoundError(f"File not found: {filename}")
    with open(filename, 'r', encoding='utf-8') as f:
        document = json.load(f)
    return read(document)

def read(document: Mapping[str, Any]) -> Coverage:
    """
    Build a Coverage from a parsed CoverageJSON document

    Both the current format (``domain.axes``, NdArray ranges) and the early
    format with axes listed directly on the domain are understood.
    """
    doc_type = document.get('type', '')
    if not doc_type.endswith('Coverage'):
        raise ValueError(f"Unsupported CoverageJSON type: {doc_type!r}, expected a Coverage")
    if 'domain' not in document:
        raise ValueError("Coverage document has no domain")

    domain = _read_domain(document['domain'], document.get('domainType'))
    parameters = {key: _read_parameter(key, spec)
                  for key, spec in document.get('parameters', {}).items()}

    ranges = {}
    for key, spec in document.get('ranges', {}).items():
        if key == 'type':
            continue
        ranges[key] = _read_range(spec, domain)

    missing = set(parameters) - set(ranges)
    if missing:
        logger.debug("Parameters without range values: %s", sorted(missing))

    return Coverage(domain=domain, parameters=parameters, ranges=ranges, id=document.get('id'))

def _i18n(value: Any) -> Optional[str]:
    """Pick a display string from an i18n object ({'en': ...})"""
    if value is None or isinstance(value, str):
        return value
    if 'en' in value:
        return value['en']
    return next(iter(value.values()), None)

def _axis_values(name: str, spec: Any) -> np.ndarray:
    if isinstance(spec, Mapping):
        if 'values' in spec:
            values = spec['values']
        elif {'start', 'stop', 'num'} <= set(spec):
            return np.linspace(spec['start'], spec['stop'], spec['num'])
        else:
            raise ValueError(f"Axis '{name}' has neither values nor start/stop/num")
    else:
        values = spec

    if values and all(isinstance(v, str) for v in values):
        # ISO 8601 timestamps; numpy does not parse the trailing Z
        return np.array([v[:-1] if v.endswith('Z') else v for v in values],
                        dtype='datetime64[ms]')
    return np.asarray(values)

def _read_domain(spec: Mapping[str, Any], domain_type: Optional[str]) -> Domain:
    if 'axes' in spec:
        axes_spec = spec['axes']
        domain_type = spec.get('domainType', domain_type)
    else:
        axes_spec = {name: spec[name] for name in DEFAULT_AXIS_ORDER[::-1] if name in spec}
        if spec.get('type') != 'Domain':
            domain_type = domain_type or spec.get('type')

    if not domain_type:
        raise ValueError("Domain type could not be determined")

    axes = {}
    composite_axes = {}
    for name, axis in axes_spec.items():
        if isinstance(axis, Mapping) and 'coordinates' in axis:
            if axis.get('dataType') == 'tuple':
                composite_axes[name] = _read_composite_axis(name, axis)
            else:
                # polygon axes have no point coordinates to search on
                logger.debug("Skipping composite axis '%s' of type %s", name, axis.get('dataType'))
            continue
        axes[name] = Axis(name, _axis_values(name, axis))
    return Domain(domain_type=domain_type, axes=axes,
                  referencing=tuple(spec.get('referencing', ())),
                  composite_axes=composite_axes)

def _read_composite_axis(name: str, spec: Mapping[str, Any]) -> CompositeAxis:
    coordinates = list(spec['coordinates'])
    values = spec.get('values', [])
    if any(len(v) != len(coordinates) for v in values):
        raise ValueError(f"Composite axis '{name}' has tuples not matching {coordinates}")
    columns = list(zip(*values)) if values else [() for _ in coordinates]
    components = {coord: _axis_values(coord, list(column))
                  for coord, column in zip(coordinates, columns)}
    return CompositeAxis(name, coordinates, components)

def _read_unit(spec: Optional[Mapping[str, Any]]) -> Optional[Unit]:
    if spec is None:
        return None
    symbol = spec.get('symbol')
    if isinstance(symbol, Mapping):
        symbol = symbol.get('value')
    return Unit(id=spec.get('id'), symbol=symbol, label=_i18n(spec.get('label')))

def _read_categories(specs: Optional[Sequence[Mapping[str, Any]]]):
    if specs is None:
        return None
    return tuple(Category(id=cat.get('id'),
                          label=_i18n(cat.get('label')),
                          preferred_color=cat.get('preferredColor'))
                 for cat in specs)

def _read_parameter(key: str, spec: Mapping[str, Any]) -> Parameter:
    obs = spec.get('observedProperty', {})
    observed_property = ObservedProperty(id=obs.get('id'),
                                         label=_i18n(obs.get('label')),
                                         categories=_read_categories(obs.get('categories')))
    encoding = spec.get('categoryEncoding')
    if encoding is not None:
        encoding = {cat_id: tuple(v) if isinstance(v, list) else (v,)
                    for cat_id, v in encoding.items()}
    return Parameter(key=key,
                     id=spec.get('id'),
                     observed_property=observed_property,
                     unit=_read_unit(spec.get('unit')),
                     description=_i18n(spec.get('description')),
                     category_encoding=encoding,
                     preferred_palette=spec.get('preferredPalette'))

def _read_range(spec: Mapping[str, Any], domain: Domain) -> Range:
    if 'axisNames' in spec:
        axis_names: List[str] = list(spec['axisNames'])
        shape = spec.get('shape')
        if shape is None:
            shape = [domain.axis_length(name) for name in axis_names]
    else:
        axis_names = [name for name in DEFAULT_AXIS_ORDER if name in domain.axes]
        shape = [len(domain.axes[name]) for name in axis_names]

    raw = spec.get('values')
    if raw is None:
        raise ValueError("Only ranges with inline values are supported")

    values = as_masked(raw)
    if values.size != int(np.prod(shape, dtype=int)):
        raise ValueError(f"Range has {values.size} values but shape {shape}")
    values = values.reshape(shape)
    return Range(values, axis_names,
                 valid_min=spec.get('validMin'), valid_max=spec.get('validMax'))
