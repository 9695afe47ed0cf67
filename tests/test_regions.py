"""Tests for region extraction."""

import numpy as np
import pytest

from py_mapgen.core import (
    BORDER, AssignmentField, Metric, Rect, Region, SiteSet,
    apply_borders, assign, bounding_rect_of, extract,
)


@pytest.fixture
def sites():
    return SiteSet.from_positions([(2, 2), (7, 7), (8, 1)])


@pytest.fixture
def field(sites):
    return apply_borders(assign(12, 10, sites, Metric.EUCLIDEAN), sites, Metric.EUCLIDEAN, 1.0)


class TestExtract:
    """Test extraction of per-site regions."""

    def test_one_region_per_site_in_id_order(self, field, sites):
        regions = extract(field, sites)

        assert len(regions) == len(sites)
        assert [r.reference_value for r in regions] == [0, 1, 2]

    def test_border_region_appended(self, field, sites):
        regions = extract(field, sites, include_border=True)

        assert len(regions) == len(sites) + 1
        assert regions[-1].reference_value == BORDER
        assert regions[-1].area == field.count(BORDER)

    def test_shares_field(self, field, sites):
        """Test that regions hold the field itself, not a copy."""
        regions = extract(field, sites)
        assert all(r.mask is field for r in regions)

    def test_freezes_field(self, field, sites):
        extract(field, sites)
        assert field.frozen
        with pytest.raises(ValueError):
            field[(0, 0)] = 1

    def test_region_membership(self, field, sites):
        for region in extract(field, sites):
            members = set(region)
            expected = {
                (x, y)
                for y in range(field.height)
                for x in range(field.width)
                if field[(x, y)] == region.reference_value
            }
            assert members == expected
            assert region.area == len(expected)

    def test_coverage(self, field, sites):
        """Test that site regions and the border region partition the grid."""
        regions = extract(field, sites, include_border=True)
        seen = []
        for region in regions:
            seen.extend(region)

        assert len(seen) == field.width * field.height
        assert len(set(seen)) == len(seen)

    def test_tightness(self, field, sites):
        """Test that every edge of each rectangle touches a region cell."""
        for region in extract(field, sites, include_border=True):
            if region.is_empty:
                continue
            rect = region.bounding_rect
            cells = list(region)
            assert any(x == rect.x0 for x, _ in cells)
            assert any(x == rect.x1 for x, _ in cells)
            assert any(y == rect.y0 for _, y in cells)
            assert any(y == rect.y1 for _, y in cells)

    def test_matches_bounding_rect_of(self, field, sites):
        for region in extract(field, sites):
            assert region.bounding_rect == bounding_rect_of(field, region.reference_value)

    def test_empty_region(self):
        """Test that a site without cells yields an empty region."""
        sites = SiteSet.from_positions([(0, 0), (1, 0), (5, 5)])
        field = AssignmentField(np.array([[0, 1], [0, 1]]))

        regions = extract(field, sites)

        assert regions[2].is_empty
        assert regions[2].bounding_rect == Rect.empty()
        assert list(regions[2]) == []
        assert regions[2].area == 0


class TestRegion:
    """Test region queries."""

    @pytest.fixture
    def region(self):
        cells = np.array([
            [1, 1, 0, 0],
            [1, 0, 0, 0],
            [1, 1, 1, 0],
        ])
        field = AssignmentField(cells)
        return Region(bounding_rect_of(field, 1), 1, field)

    def test_corners(self, region):
        assert region.top_left == (0, 0)
        assert region.bottom_right == (2, 2)

    def test_iteration_is_lazy_and_restartable(self, region):
        first = list(region)
        assert first == [(0, 0), (1, 0), (0, 1), (0, 2), (1, 2), (2, 2)]
        assert list(region) == first

    def test_iteration_reads_current_mask(self, region):
        region.mask[(1, 1)] = 1
        assert (1, 1) in list(region)

    def test_contains(self, region):
        assert region.contains((0, 1))
        assert not region.contains((1, 1))
        assert not region.contains((3, 0))

    def test_boundary(self, region):
        field = AssignmentField.filled(5, 5, 0)
        field[(2, 2)] = 1
        inner = Region(bounding_rect_of(field, 0), 0, field)

        boundary = set(inner.iter_boundary())

        assert (0, 0) in boundary
        assert (2, 1) in boundary
        assert (1, 1) not in boundary
        assert len(boundary) == 16 + 4
        assert set(region.iter_boundary()) == set(region)
