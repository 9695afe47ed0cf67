"""
Border shaping for Voronoi cells.

A cell owned by site ``s`` becomes a border cell when the runner-up site is
almost as close as ``s``: ``(d2 - d) < effective_width``. With curved
borders the width is scaled by ``f(d) = 2d / (d + r)``, which grows with
the distance ``d`` from the owning site, is bounded by 2 and equals 1 at
``d = r``. ``r`` defaults to the mean cell radius of the partition.
"""

import math
from typing import Optional

import numpy as np
import structlog

from .assignment import nearest_two
from .errors import ConfigurationError
from .grid import BORDER, AssignmentField
from .metric import MetricLike
from .sites import SiteSet

logger = structlog.get_logger()


def mean_cell_radius(width: int, height: int, n_sites: int) -> float:
    """Radius of a disc with the average cell area."""
    return math.sqrt(width * height / (math.pi * max(n_sites, 1)))


def border_curve(distance: np.ndarray, radius: float) -> np.ndarray:
    """Width multiplier for curved borders, increasing in ``distance``."""
    distance = np.asarray(distance, dtype=np.float64)
    return 2.0 * distance / (distance + radius)


def apply_borders(field: AssignmentField, sites: SiteSet, metric: MetricLike,
                  base_width: float, curve: bool = False,
                  curve_radius: Optional[float] = None) -> AssignmentField:
    """
    Mark the band of cells near cell boundaries as border.

    Args:
        field: Assignment produced from ``sites`` and ``metric``
        sites: Sites the field was assigned from
        metric: Distance metric used for the assignment
        base_width: Band width in metric units; 0 marks nothing
        curve: Scale the width with distance from the owning site
        curve_radius: Distance at which the curve multiplier is 1

    Returns:
        New field with border cells set to ``BORDER``. Cells that were
        already border stay border.

    Raises:
        ConfigurationError: On a negative or non-finite width, or a
            non-positive curve radius
    """
    if not math.isfinite(base_width) or base_width < 0:
        raise ConfigurationError(
            f"Border width must be a nonnegative number, got {base_width}"
        )
    if curve_radius is None:
        curve_radius = mean_cell_radius(field.width, field.height, len(sites))
    elif not math.isfinite(curve_radius) or curve_radius <= 0:
        raise ConfigurationError(
            f"Curve radius must be positive, got {curve_radius}"
        )

    _, nearest, runner_up = nearest_two(field.width, field.height, sites, metric)

    result = field.copy()
    cells = result.cells
    assigned = cells != BORDER

    if curve:
        width = base_width * border_curve(nearest, curve_radius)
    else:
        width = base_width

    gap = runner_up - nearest
    marked = assigned & (gap < width)
    cells[marked] = BORDER

    logger.debug("Borders applied", base_width=base_width, curve=curve,
                 border_cells=int(np.count_nonzero(cells == BORDER)))
    return result
