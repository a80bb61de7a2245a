"""
Tests for conversion between coverages and xarray Datasets
"""

import pytest
import numpy as np
import xarray as xr

from covlayer.core.datatypes import (
    MISSING, Axis, Coverage, Domain, ObservedProperty, Parameter, Range, Unit,
)
from covlayer.io.xarray_io import to_xarray, from_xarray


class TestToXarray:

    @pytest.fixture
    def coverage(self):
        domain = Domain('Grid', {'x': Axis('x', [0.0, 1.0, 2.0]), 'y': Axis('y', [10.0, 20.0])})
        param = Parameter(key='T', unit=Unit(symbol='K'),
                          observed_property=ObservedProperty(id='temp', label='Temperature'))
        rng = Range([[1.0, None, 3.0], [4.0, 5.0, 6.0]], ['y', 'x'])
        return Coverage(domain, {'T': param}, {'T': rng})

    def test_values(self, coverage):
        ds = to_xarray(coverage)
        assert ds['T'].dims == ('y', 'x')
        assert np.isnan(ds['T'].values[0, 1])
        assert ds['T'].values[1, 2] == 6.0
        np.testing.assert_array_equal(ds['x'].values, [0.0, 1.0, 2.0])

    def test_attributes(self, coverage):
        ds = to_xarray(coverage)
        assert ds['T'].attrs['units'] == 'K'
        assert ds['T'].attrs['long_name'] == 'Temperature'
        assert ds['T'].attrs['observed_property'] == 'temp'
        assert ds.attrs['domain_type'] == 'Grid'

    def test_non_grid(self):
        cov = Coverage(Domain('Trajectory', {'x': Axis('x', [0])}))
        with pytest.raises(ValueError):
            to_xarray(cov)


class TestFromXarray:

    @pytest.fixture
    def dataset(self):
        data = np.array([[1.0, np.nan], [3.0, 4.0]])
        return xr.Dataset(
            {'sst': (('lat', 'lon'), data, {'units': 'degC', 'long_name': 'Sea surface temperature'})},
            coords={'lat': [10.0, 20.0], 'lon': [100.0, 110.0]},
        )

    def test_dims_renamed(self, dataset):
        cov = from_xarray(dataset, dims={'lon': 'x', 'lat': 'y'})
        np.testing.assert_array_equal(cov.domain.x, [100.0, 110.0])
        np.testing.assert_array_equal(cov.domain.y, [10.0, 20.0])
        assert cov.get_range('sst').axis_names == ('y', 'x')

    def test_nan_becomes_missing(self, dataset):
        rng = from_xarray(dataset, dims={'lon': 'x', 'lat': 'y'}).get_range('sst')
        assert rng.get(y=0, x=1) is MISSING
        assert rng.get(y=1, x=0) == 3.0

    def test_parameters_from_attrs(self, dataset):
        param = from_xarray(dataset).get_parameter('sst')
        assert param.unit.symbol == 'degC'
        assert param.observed_property.label == 'Sea surface temperature'

    def test_explicit_parameters(self, dataset):
        params = {'sst': Parameter(key='sst', id='custom')}
        cov = from_xarray(dataset, parameters=params)
        assert cov.get_parameter('sst').id == 'custom'

    def test_dimension_without_coordinate(self):
        ds = xr.Dataset({'v': (('y', 'x'), np.zeros((2, 3)))})
        cov = from_xarray(ds)
        np.testing.assert_array_equal(cov.domain.x, [0, 1, 2])

    def test_round_trip_keeps_missing(self):
        domain = Domain('Grid', {'x': Axis('x', [0.0, 1.0]), 'y': Axis('y', [0.0])})
        cov = Coverage(domain, {'v': Parameter(key='v')}, {'v': Range([[None, 2.0]], ['y', 'x'])})
        back = from_xarray(to_xarray(cov))
        assert back.domain_type == 'Grid'
        assert back.get_range('v').get(y=0, x=0) is MISSING
        assert back.get_range('v').get(y=0, x=1) == 2.0
