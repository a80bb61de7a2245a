"""
Conversion between grid coverages and xarray Datasets
"""

from typing import Dict, Mapping, Optional

import numpy as np
import xarray as xr

from ..core.datatypes import Axis, Coverage, Domain, ObservedProperty, Parameter, Range, Unit

def to_xarray(cov: Coverage) -> xr.Dataset:
    """
    Convert a grid coverage to an xarray Dataset

    Missing values become NaN, since xarray has no separate missing marker.
    Parameter metadata is kept in the variable attributes.

    Parameters
    ----------
    cov : Coverage
        Coverage with a grid domain

    Returns
    -------
    xr.Dataset
        One data variable per range
    """
    if not cov.domain.is_grid:
        raise ValueError(f"Only grid coverages can be converted, got {cov.domain_type}")

    coords = {name: (name, axis.values) for name, axis in cov.domain.axes.items()}
    data_vars = {}
    for key, rng in cov.ranges.items():
        values = rng.values.astype(float).filled(np.nan)
        attrs = {}
        param = cov.parameters.get(key)
        if param is not None:
            if param.observed_property.id:
                attrs['observed_property'] = param.observed_property.id
            if param.observed_property.label:
                attrs['long_name'] = param.observed_property.label
            if param.unit is not None and (param.unit.symbol or param.unit.id):
                attrs['units'] = param.unit.symbol or param.unit.id
        data_vars[key] = (rng.axis_names, values, attrs)

    return xr.Dataset(data_vars=data_vars, coords=coords,
                      attrs={'domain_type': cov.domain_type})

def from_xarray(ds: xr.Dataset,
                dims: Optional[Mapping[str, str]] = None,
                domain_type: str = 'Grid',
                parameters: Optional[Dict[str, Parameter]] = None) -> Coverage:
    """
    Build a grid coverage from an xarray Dataset

    Parameters
    ----------
    ds : xr.Dataset
        Dataset with 1-D dimension coordinates
    dims : dict, optional
        Dataset dimension -> coverage axis name, e.g. ``{'lon': 'x', 'lat': 'y'}``
    domain_type : str
        Domain type of the result
    parameters : dict, optional
        Parameters to use instead of those derived from variable attributes

    Returns
    -------
    Coverage
        Coverage whose ranges mask NaN entries as missing
    """
    dims = dict(dims or {})
    if dims:
        ds = ds.rename({src: dst for src, dst in dims.items() if src in ds.dims})

    axes = {}
    for name in ds.dims:
        if name in ds.coords:
            axes[name] = Axis(name, ds.coords[name].values)
        else:
            axes[name] = Axis(name, np.arange(ds.sizes[name]))

    ranges = {}
    derived = {}
    for key, var in ds.data_vars.items():
        key = str(key)
        values = np.ma.masked_invalid(var.values) if np.issubdtype(var.dtype, np.floating) \
            else np.ma.MaskedArray(var.values)
        ranges[key] = Range(values, [str(d) for d in var.dims])
        units = var.attrs.get('units')
        derived[key] = Parameter(
            key=key,
            observed_property=ObservedProperty(id=var.attrs.get('observed_property'),
                                               label=var.attrs.get('long_name')),
            unit=Unit(symbol=units) if units else None,
        )

    domain = Domain(domain_type=ds.attrs.get('domain_type', domain_type), axes=axes)
    return Coverage(domain=domain, parameters=parameters if parameters is not None else derived,
                    ranges=ranges)
