"""
Distance metrics for the nearest-site assignment.

Built-in metrics are plain enumeration values; user supplied distance
functions are wrapped in ``CustomMetric``. Both compute single pairs and
whole grids through ``scipy.spatial.distance.cdist`` so that a distance
computed for one pair is bitwise identical to the same distance computed as
part of a grid, and exact ties compare equal without any tolerance.
"""

from enum import Enum
from typing import Callable, Sequence, Union

import numpy as np
from scipy.spatial.distance import cdist

from .errors import ConfigurationError

Coordinate = Sequence[float]


class Metric(str, Enum):
    """Built-in distance metrics."""

    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"

    @property
    def scipy_name(self) -> str:
        return _SCIPY_NAMES[self]

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        """Distance between two coordinates."""
        return float(self.distances_to(np.asarray([a], dtype=np.float64), b)[0])

    def distances_to(self, points: np.ndarray, site: Coordinate) -> np.ndarray:
        """Distances from every row of an ``(n, 2)`` array to ``site``."""
        site = np.asarray([site], dtype=np.float64)
        return cdist(points, site, metric=self.scipy_name)[:, 0]


_SCIPY_NAMES = {
    Metric.EUCLIDEAN: "euclidean",
    Metric.MANHATTAN: "cityblock",
    Metric.CHEBYSHEV: "chebyshev",
}

_ALIASES = {
    "euclidean": Metric.EUCLIDEAN,
    "manhattan": Metric.MANHATTAN,
    "cityblock": Metric.MANHATTAN,
    "taxicab": Metric.MANHATTAN,
    "chebyshev": Metric.CHEBYSHEV,
    "chessboard": Metric.CHEBYSHEV,
}


class CustomMetric:
    """Wraps a user supplied ``f(a, b) -> float`` distance function.

    The function must be deterministic, symmetric and nonnegative. It is
    called once per (cell, site) pair, so it is much slower than the
    built-ins on large grids.
    """

    def __init__(self, func: Callable[[Coordinate, Coordinate], float], name: str = None):
        if not callable(func):
            raise ConfigurationError(f"Metric must be callable, got {func!r}")
        self.func = func
        self.name = name or getattr(func, "__name__", "custom")

    def _pair(self, u: np.ndarray, v: np.ndarray) -> float:
        return float(self.func((u[0], u[1]), (v[0], v[1])))

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        return float(self.distances_to(np.asarray([a], dtype=np.float64), b)[0])

    def distances_to(self, points: np.ndarray, site: Coordinate) -> np.ndarray:
        site = np.asarray([site], dtype=np.float64)
        return cdist(points, site, metric=self._pair)[:, 0]

    def __repr__(self) -> str:
        return f"CustomMetric({self.name})"


MetricLike = Union[Metric, CustomMetric, str, Callable[[Coordinate, Coordinate], float]]


def resolve_metric(metric: MetricLike) -> Union[Metric, CustomMetric]:
    """Turn a metric name, enum value or callable into a usable metric.

    Raises:
        ConfigurationError: If the value names no known metric.
    """
    if isinstance(metric, (Metric, CustomMetric)):
        return metric
    if isinstance(metric, str):
        try:
            return _ALIASES[metric.strip().lower()]
        except KeyError:
            known = ", ".join(sorted(_ALIASES))
            raise ConfigurationError(
                f"Unknown metric: {metric}. Available: {known}"
            ) from None
    if callable(metric):
        return CustomMetric(metric)
    raise ConfigurationError(f"Unsupported metric: {metric!r}")
