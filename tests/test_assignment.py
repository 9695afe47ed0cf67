"""Tests for the nearest-site assignment pass."""

import numpy as np
import pytest

from py_mapgen.core import ConfigurationError, Metric, SiteSet, assign, nearest_two


@pytest.fixture
def two_sites():
    return SiteSet.from_positions([(2, 2), (7, 7)])


class TestTwoSiteSplit:
    """Test the 10x10 grid split by two sites."""

    def test_bisector_split(self, two_sites):
        field = assign(10, 10, two_sites, Metric.EUCLIDEAN)

        assert field[(4, 4)] == 0
        assert field[(5, 5)] == 1
        assert field[(0, 0)] == 0
        assert field[(9, 9)] == 1

    def test_ties_go_to_lowest_id(self, two_sites):
        """Test that cells on the exact bisector x + y == 9 belong to site 0."""
        field = assign(10, 10, two_sites, Metric.EUCLIDEAN)

        for x in range(10):
            assert field[(x, 9 - x)] == 0

    def test_ties_independent_of_position_order(self):
        """Test that swapping the sites swaps ownership except on ties."""
        sites = SiteSet.from_positions([(7, 7), (2, 2)])
        field = assign(10, 10, sites, Metric.EUCLIDEAN)

        assert field[(4, 5)] == 0  # tie, lowest id wins
        assert field[(3, 3)] == 1
        assert field[(8, 8)] == 0

    def test_split_sizes(self, two_sites):
        field = assign(10, 10, two_sites, Metric.EUCLIDEAN)
        # 55 cells with x + y <= 9 (ties included) go to site 0
        np.testing.assert_array_equal(field.cell_counts(2), [55, 45])


class TestNearestSiteCorrectness:
    """Test the argmin property for every cell."""

    @pytest.mark.parametrize("metric", list(Metric))
    def test_argmin_with_lowest_id(self, metric):
        sites = SiteSet.generate(12, 24, 18, rng_seed="test_seed")
        field = assign(24, 18, sites, metric)

        for y in range(field.height):
            for x in range(field.width):
                owner = field[(x, y)]
                distances = [metric.distance((x, y), s.position) for s in sites]
                best = min(distances)
                assert distances[owner] == best
                assert owner == distances.index(best)

    def test_custom_metric(self):
        sites = SiteSet.from_positions([(0, 0), (9, 0)])

        def horizontal(a, b):
            return abs(a[0] - b[0])

        field = assign(10, 3, sites, horizontal)
        assert field[(4, 2)] == 0
        assert field[(5, 0)] == 1

    def test_metric_by_name(self, two_sites):
        by_name = assign(10, 10, two_sites, "chebyshev")
        by_enum = assign(10, 10, two_sites, Metric.CHEBYSHEV)
        assert by_name == by_enum


class TestNearestTwo:
    """Test runner-up distances."""

    def test_runner_up(self, two_sites):
        owner, nearest, runner_up = nearest_two(10, 10, two_sites, Metric.MANHATTAN)

        # cells are indexed [y, x]
        assert owner[1, 3] == 0
        assert nearest[1, 3] == 2.0
        assert runner_up[1, 3] == 10.0

    def test_single_site(self):
        sites = SiteSet.from_positions([(1, 1)])
        owner, nearest, runner_up = nearest_two(3, 3, sites, Metric.EUCLIDEAN)

        assert np.all(owner == 0)
        assert nearest[1, 1] == 0.0
        assert np.all(np.isinf(runner_up))

    def test_ties_have_zero_gap(self, two_sites):
        _, nearest, runner_up = nearest_two(10, 10, two_sites, Metric.EUCLIDEAN)
        assert runner_up[5, 4] - nearest[5, 4] == 0.0


class TestAssignmentErrors:
    """Test invalid inputs."""

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 5)])
    def test_invalid_dimensions(self, two_sites, width, height):
        with pytest.raises(ConfigurationError):
            assign(width, height, two_sites, Metric.EUCLIDEAN)

    def test_sites_outside_grid(self):
        """Test that sites outside the grid are legal."""
        sites = SiteSet.from_positions([(-5, 2), (20, 2)])
        field = assign(10, 4, sites, Metric.EUCLIDEAN)
        assert field[(0, 0)] == 0
        assert field[(9, 3)] == 1


def test_determinism():
    """Test that identical inputs produce identical fields."""
    sites = SiteSet.generate(20, 50, 40, rng_seed=123)
    field1 = assign(50, 40, sites, Metric.EUCLIDEAN)
    field2 = assign(50, 40, SiteSet.generate(20, 50, 40, rng_seed=123), Metric.EUCLIDEAN)
    np.testing.assert_array_equal(field1.cells, field2.cells)
