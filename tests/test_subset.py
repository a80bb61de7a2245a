"""
Tests for axis subsetting and point value lookup
"""

import pytest
import numpy as np

from covlayer.core.datatypes import MISSING, Axis, Coverage, Domain, Parameter, Range
from covlayer.processing.subset import (
    as_axis_value, subset_by_index, subset_by_value, value_at, in_domain_bbox,
)


@pytest.fixture
def grid():
    """Grid with 3 times, 2 depths, 3 latitudes (descending) and 4 longitudes"""
    domain = Domain('Grid', {
        't': Axis('t', np.array(['2020-01-01', '2020-02-01', '2020-03-01'], dtype='datetime64[ms]')),
        'z': Axis('z', [0, 10]),
        'y': Axis('y', [20, 10, 0]),
        'x': Axis('x', [0, 1, 2, 3]),
    })
    values = np.arange(3 * 2 * 3 * 4, dtype=float).reshape(3, 2, 3, 4)
    values = np.ma.MaskedArray(values, mask=np.zeros(values.shape, dtype=bool))
    values[0, 0, 0, 0] = np.ma.masked
    return Coverage(domain, {'v': Parameter(key='v')}, {'v': Range(values, ['t', 'z', 'y', 'x'])})


class TestSubsetByIndex:

    def test_integer_keeps_axis(self, grid):
        sub = subset_by_index(grid, {'t': 1})
        assert len(sub.domain.axes['t']) == 1
        assert sub.domain.t[0] == np.datetime64('2020-02-01', 'ms')
        assert sub.get_range('v').shape == {'t': 1, 'z': 2, 'y': 3, 'x': 4}
        assert sub.get_range('v').get(t=0, z=1, y=2, x=3) == grid.get_range('v').get(t=1, z=1, y=2, x=3)

    def test_slice(self, grid):
        sub = subset_by_index(grid, {'x': slice(1, 3)})
        np.testing.assert_array_equal(sub.domain.x, [1, 2])
        assert sub.get_range('v').shape['x'] == 2

    def test_negative_index(self, grid):
        sub = subset_by_index(grid, {'z': -1})
        np.testing.assert_array_equal(sub.domain.z, [10])

    def test_out_of_bounds(self, grid):
        with pytest.raises(IndexError):
            subset_by_index(grid, {'t': 3})

    def test_unknown_axis_skipped(self, grid):
        sub = subset_by_index(grid, {'foo': 0})
        assert sub.get_range('v').shape == grid.get_range('v').shape

    def test_input_unchanged(self, grid):
        sub = subset_by_index(grid, {'t': 0, 'z': 0})
        sub.get_range('v').values[0, 0, 1, 1] = -1
        assert grid.get_range('v').get(t=0, z=0, y=1, x=1) == 5.0
        assert len(grid.domain.axes['t']) == 3

    def test_missing_values_kept(self, grid):
        sub = subset_by_index(grid, {'t': 0, 'z': 0})
        assert sub.get_range('v').get(y=0, x=0) is MISSING


class TestSubsetByValue:

    def test_nearest_time(self, grid):
        sub = subset_by_value(grid, {'t': '2020-02-03T00:00:00Z'})
        assert sub.domain.t[0] == np.datetime64('2020-02-01', 'ms')

    def test_nearest_depth(self, grid):
        sub = subset_by_value(grid, {'z': 7})
        np.testing.assert_array_equal(sub.domain.z, [10])

    def test_none_selects_first(self, grid):
        sub = subset_by_value(grid, {'t': None, 'z': None})
        assert sub.domain.t[0] == grid.domain.t[0]
        np.testing.assert_array_equal(sub.domain.z, [0])


class TestAsAxisValue:

    def test_datetime_conversions(self):
        values = np.array(['2020-01-01'], dtype='datetime64[ms]')
        expected = np.datetime64('2020-01-02T06:00', 'ms')
        assert as_axis_value(values, '2020-01-02T06:00:00Z') == expected
        assert as_axis_value(values, np.datetime64('2020-01-02T06:00')) == expected

    def test_numeric_passthrough(self):
        assert as_axis_value(np.array([1.0, 2.0]), 1.5) == 1.5


class TestValueAt:

    @pytest.fixture
    def slice2d(self, grid):
        return subset_by_value(grid, {'t': '2020-01-01', 'z': 0})

    def test_nearest_cell(self, slice2d):
        # y axis is descending: 20, 10, 0
        assert value_at(slice2d, 'v', 1.2, 9) == 5.0
        assert value_at(slice2d, 'v', 2.9, 1) == 11.0

    def test_missing_cell(self, slice2d):
        assert value_at(slice2d, 'v', 0, 20) is MISSING

    def test_outside_bbox(self, slice2d):
        assert value_at(slice2d, 'v', 4, 10) is MISSING
        assert not in_domain_bbox(slice2d, 4, 10)
        assert in_domain_bbox(slice2d, 3, 10)

    def test_requires_single_slices(self, grid):
        with pytest.raises(ValueError):
            value_at(grid, 'v', 1, 10)

    def test_unknown_parameter(self, slice2d):
        with pytest.raises(KeyError):
            value_at(slice2d, 'missing', 1, 10)
