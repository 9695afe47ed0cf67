"""
Lloyd relaxation on a discrete assignment field.

Each site moves to the centroid of the cells assigned to it. Border cells
count towards no site. The field is not patched; callers re-run the
assignment pass (and border shaping) after every step.
"""

import warnings
from typing import List, Tuple

import numpy as np
import structlog

from .errors import DegenerateStateWarning
from .grid import BORDER, AssignmentField
from .sites import SiteSet

logger = structlog.get_logger()


def accumulate_centroids(field: AssignmentField, n_sites: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sum cell coordinates and counts per site.

    Args:
        field: Assignment field
        n_sites: Number of sites the field was assigned from

    Returns:
        ``(sums, counts)`` where ``sums`` is ``(n_sites, 2)`` holding the
        summed ``(x, y)`` of each site's cells and ``counts`` is ``(n_sites,)``
    """
    ys, xs = np.nonzero(field.cells != BORDER)
    owners = field.cells[ys, xs]

    sums = np.zeros((n_sites, 2), dtype=np.float64)
    sums[:, 0] = np.bincount(owners, weights=xs.astype(np.float64), minlength=n_sites)[:n_sites]
    sums[:, 1] = np.bincount(owners, weights=ys.astype(np.float64), minlength=n_sites)[:n_sites]
    counts = np.bincount(owners, minlength=n_sites)[:n_sites]
    return sums, counts


def starved_sites(field: AssignmentField, n_sites: int) -> List[int]:
    """Ids of sites that own no cells."""
    return [int(i) for i in np.flatnonzero(field.cell_counts(n_sites) == 0)]


def relax(field: AssignmentField, sites: SiteSet) -> SiteSet:
    """
    Apply one Lloyd relaxation step.

    Sites without cells keep their position and a DegenerateStateWarning
    listing them is issued.

    Args:
        field: Assignment produced from ``sites``
        sites: Current sites

    Returns:
        New SiteSet with the same ids and updated positions
    """
    sums, counts = accumulate_centroids(field, len(sites))

    positions = np.array(sites.positions)
    populated = counts > 0
    positions[populated] = sums[populated] / counts[populated, None]

    if not np.all(populated):
        starved = [int(i) for i in np.flatnonzero(~populated)]
        logger.warning("Sites without cells keep their position", site_ids=starved)
        warnings.warn(DegenerateStateWarning(starved), stacklevel=2)

    shift = np.abs(positions - sites.positions).max() if len(sites) else 0.0
    logger.debug("Relaxation step complete", sites=len(sites), max_shift=float(shift))
    return sites.with_positions(positions)
