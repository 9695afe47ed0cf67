"""
Nearest-site assignment pass.

Every cell of the grid is assigned to the site with the smallest distance
under the chosen metric. Ties go to the smallest site id. The pass also
tracks the runner-up distance per cell, which border shaping uses to
measure how close a cell is to the boundary between two cells.
"""

from typing import Tuple

import numpy as np
import structlog

from .errors import ConfigurationError
from .grid import AssignmentField
from .metric import MetricLike, resolve_metric
from .sites import SiteSet

logger = structlog.get_logger()


def cell_coordinates(width: int, height: int) -> np.ndarray:
    """``(width*height, 2)`` array of ``(x, y)`` cell positions in row-major order."""
    ys, xs = np.mgrid[0:height, 0:width]
    return np.column_stack([xs.ravel(), ys.ravel()]).astype(np.float64)


def nearest_two(width: int, height: int, sites: SiteSet,
                metric: MetricLike) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Find the nearest and runner-up site distances for every cell.

    Sites are folded in id order and the nearest is only replaced on a
    strictly smaller distance, so equidistant cells keep the lowest id.

    Args:
        width: Grid width in cells
        height: Grid height in cells
        sites: Sites to assign cells to
        metric: Distance metric

    Returns:
        ``(owner, nearest, runner_up)`` arrays of shape ``(height, width)``.
        ``runner_up`` is ``inf`` when there is only one site.

    Raises:
        ConfigurationError: If a dimension is not positive or there are no sites
    """
    if width <= 0 or height <= 0:
        raise ConfigurationError(
            f"Grid dimensions must be positive, got {width}x{height}"
        )
    if len(sites) == 0:
        raise ConfigurationError("At least one site is required")

    metric = resolve_metric(metric)
    points = cell_coordinates(width, height)
    n_cells = len(points)

    owner = np.zeros(n_cells, dtype=np.int32)
    nearest = np.full(n_cells, np.inf, dtype=np.float64)
    runner_up = np.full(n_cells, np.inf, dtype=np.float64)

    for site_id, position in enumerate(sites.positions):
        dist = metric.distances_to(points, position)
        closer = dist < nearest
        runner_up = np.where(closer, nearest, np.minimum(runner_up, dist))
        nearest = np.where(closer, dist, nearest)
        owner[closer] = site_id

    shape = (height, width)
    return owner.reshape(shape), nearest.reshape(shape), runner_up.reshape(shape)


def assign(grid_width: int, grid_height: int, sites: SiteSet,
           metric: MetricLike) -> AssignmentField:
    """
    Run the assignment pass.

    Returns:
        A new AssignmentField holding the nearest site id for every cell
    """
    owner, _, _ = nearest_two(grid_width, grid_height, sites, metric)
    field = AssignmentField(owner)

    logger.debug("Assignment pass complete",
                 width=grid_width, height=grid_height, sites=len(sites))
    return field
