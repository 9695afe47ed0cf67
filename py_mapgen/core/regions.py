"""
Region extraction.

A Region is a bounding rectangle plus a reference into the shared
assignment field. It does not copy any cells: iterating a region walks its
rectangle and yields the positions whose field value equals the region's
reference value, every time it is iterated.
"""

from dataclasses import dataclass
from typing import Iterator, List

import numpy as np
import structlog
from scipy import ndimage

from .grid import BORDER, AssignmentField
from .rect import Position, Rect
from .sites import SiteSet

logger = structlog.get_logger()


@dataclass(frozen=True, eq=False)
class Region:
    """Cells of ``mask`` equal to ``reference_value`` inside ``bounding_rect``."""

    bounding_rect: Rect
    reference_value: int
    mask: AssignmentField

    @property
    def top_left(self) -> Position:
        return self.bounding_rect.top_left

    @property
    def bottom_right(self) -> Position:
        return self.bounding_rect.bottom_right

    @property
    def is_empty(self) -> bool:
        return self.bounding_rect.is_empty

    @property
    def area(self) -> int:
        """Number of cells in the region."""
        rows, cols = self.bounding_rect.to_slices()
        return int(np.count_nonzero(self.mask.cells[rows, cols] == self.reference_value))

    def contains(self, pos: Position) -> bool:
        return self.bounding_rect.contains(pos) and self.mask[pos] == self.reference_value

    def __iter__(self) -> Iterator[Position]:
        for pos in self.bounding_rect.iter_indices():
            if self.mask[pos] == self.reference_value:
                yield pos

    def iter_boundary(self) -> Iterator[Position]:
        """Region cells touching the grid edge or a cell outside the region."""
        for pos in self:
            neighbors = list(self.mask.neighbors(pos))
            if len(neighbors) < 4 or any(v != self.reference_value for _, v in neighbors):
                yield pos

    def __repr__(self) -> str:
        return (f"Region(reference_value={self.reference_value}, "
                f"top_left={self.top_left}, bottom_right={self.bottom_right})")


def _slices_to_rect(slices) -> Rect:
    if slices is None:
        return Rect.empty()
    rows, cols = slices
    return Rect(cols.start, rows.start, cols.stop - 1, rows.stop - 1)


def bounding_rect_of(field: AssignmentField, value: int) -> Rect:
    """Minimal rectangle containing every cell equal to ``value``."""
    match = field.cells == value
    rows = np.flatnonzero(match.any(axis=1))
    if rows.size == 0:
        return Rect.empty()
    cols = np.flatnonzero(match.any(axis=0))
    return Rect(int(cols[0]), int(rows[0]), int(cols[-1]), int(rows[-1]))


def extract(field: AssignmentField, sites: SiteSet,
            include_border: bool = False) -> List[Region]:
    """
    Build one Region per site in id order.

    The field is frozen, since every region refers to it.

    Args:
        field: Final assignment field
        sites: Sites the field was assigned from
        include_border: Append a region for the border cells

    Returns:
        Regions for site ids ``0..n-1``, followed by the border region
        when ``include_border`` is set
    """
    field.freeze()
    n_sites = len(sites)

    # Labels are shifted by one so that border cells become background.
    labels = field.cells.astype(np.int64) + 1
    objects = ndimage.find_objects(labels, max_label=n_sites)

    regions = [
        Region(bounding_rect=_slices_to_rect(slices), reference_value=site_id, mask=field)
        for site_id, slices in enumerate(objects)
    ]
    if include_border:
        regions.append(Region(bounding_rect_of(field, BORDER), BORDER, field))

    empty = sum(1 for r in regions if r.is_empty)
    logger.debug("Regions extracted", regions=len(regions), empty_regions=empty)
    return regions
