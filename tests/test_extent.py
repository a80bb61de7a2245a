"""
Tests for palette extent computation
"""

import pytest
import numpy as np

from covlayer.core.config import ExtentConfig
from covlayer.core.datatypes import Range
from covlayer.processing.extent import (
    compute_palette_extent, enlarge_extent_if_equal, merge_extents,
)


class TestEnlargeExtent:

    def test_equal_values_widened(self):
        assert enlarge_extent_if_equal((10, 10)) == pytest.approx((9, 11))
        assert enlarge_extent_if_equal((10, 10), amount=0.5) == pytest.approx((5, 15))

    def test_unequal_values_unchanged(self):
        assert enlarge_extent_if_equal((1, 2)) == (1, 2)


class TestMergeExtents:

    def test_union(self):
        assert merge_extents((0, 10), (5, 20)) == (0, 20)
        assert merge_extents((-3, 1), (0, 0.5)) == (-3, 1)

    def test_missing_side(self):
        assert merge_extents(None, (0, 1)) is None
        assert merge_extents((0, 1), None) is None


class TestComputePaletteExtent:
    """Full and sampled extents of range values"""

    @pytest.fixture
    def rng(self):
        return Range([[1.0, None, 4.0], [-2.0, 3.0, None]], ['y', 'x'])

    def test_full(self, rng):
        assert compute_palette_extent(rng) == (-2.0, 4.0)

    def test_constant_values_widened(self):
        rng = Range([[2.0, 2.0]], ['y', 'x'])
        assert compute_palette_extent(rng) == pytest.approx((1.8, 2.2))

    def test_small_subset_is_exact(self, rng):
        assert compute_palette_extent(rng, 'subset') == (-2.0, 4.0)

    def test_large_subset_is_estimated(self):
        values = np.linspace(0, 1, 100 * 100).reshape(100, 100)
        config = ExtentConfig(max_exact_extent_cells=100, sample_target=10)
        lo, hi = compute_palette_extent(Range(values, ['y', 'x']), 'subset', config)

        # sample covers less than the full range, buffer widens it
        assert lo < 0.0 + 1e-9
        assert hi > 0.9
        assert hi - lo > 0.9 * 1.1

    def test_all_missing(self):
        with pytest.raises(ValueError):
            compute_palette_extent(Range([[None, None]], ['y', 'x']))

    def test_unknown_mode(self, rng):
        with pytest.raises(ValueError):
            compute_palette_extent(rng, 'fast')


class TestExtentConfig:

    def test_defaults(self):
        config = ExtentConfig()
        assert config.max_exact_extent_cells == 1000 * 1000
        assert config.enlarge_amount == 0.1

    def test_invalid(self):
        with pytest.raises(ValueError):
            ExtentConfig(sample_target=0)
