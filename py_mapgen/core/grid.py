"""
Assignment field: the per-cell site ownership grid.

Cells are addressed as ``(x, y)`` and stored row-major in a ``(height, width)``
int32 array. Each cell holds a site id or ``BORDER``.
"""

from typing import Iterator, Tuple

import numpy as np

from .errors import ConfigurationError
from .rect import Position, Rect

BORDER = -1
"""Sentinel value for cells that belong to no site."""

# up, right, down, left
NEIGHBOR_OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class AssignmentField:
    """Grid of site ids with a border sentinel.

    Once frozen (which happens when regions are extracted from it) the field
    is read-only: regions hold a reference to it rather than a copy, so it
    must not change while they are in use.
    """

    def __init__(self, cells: np.ndarray):
        cells = np.asarray(cells)
        if cells.ndim != 2 or cells.shape[0] == 0 or cells.shape[1] == 0:
            raise ConfigurationError(
                f"Assignment field must be a non-empty 2D grid, got shape {cells.shape}"
            )
        self.cells = cells.astype(np.int32, copy=False)

    @classmethod
    def filled(cls, width: int, height: int, value: int = BORDER) -> "AssignmentField":
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        return cls(np.full((height, width), value, dtype=np.int32))

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """``(width, height)``"""
        return (self.width, self.height)

    @property
    def bounds(self) -> Rect:
        return Rect.from_size(self.width, self.height)

    @property
    def frozen(self) -> bool:
        return not self.cells.flags.writeable

    def freeze(self) -> "AssignmentField":
        self.cells.flags.writeable = False
        return self

    def copy(self) -> "AssignmentField":
        """Writable copy."""
        return AssignmentField(self.cells.copy())

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos[0] < self.width and 0 <= pos[1] < self.height

    def __getitem__(self, pos: Position) -> int:
        x, y = pos
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} outside {self.width}x{self.height} grid")
        return int(self.cells[y, x])

    def __setitem__(self, pos: Position, value: int) -> None:
        if self.frozen:
            raise ValueError("Assignment field is frozen; regions reference it")
        x, y = pos
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} outside {self.width}x{self.height} grid")
        self.cells[y, x] = value

    def neighbors(self, pos: Position) -> Iterator[Tuple[Position, int]]:
        """In-bounds 4-neighbours of ``pos`` with their values."""
        x, y = pos
        for dx, dy in NEIGHBOR_OFFSETS:
            n = (x + dx, y + dy)
            if self.in_bounds(n):
                yield n, int(self.cells[n[1], n[0]])

    def count(self, value: int) -> int:
        return int(np.count_nonzero(self.cells == value))

    def border_mask(self) -> np.ndarray:
        return self.cells == BORDER

    def cell_counts(self, n_sites: int) -> np.ndarray:
        """Number of cells owned by each site id, border cells excluded."""
        owned = self.cells[self.cells != BORDER]
        return np.bincount(owned.ravel(), minlength=n_sites)[:n_sites]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssignmentField):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        return f"AssignmentField({self.width}x{self.height}, border_cells={self.count(BORDER)})"
