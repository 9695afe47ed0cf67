"""Axis-aligned integer rectangles with inclusive corners."""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

Position = Tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """
    Integer rectangle from ``top_left`` to ``bottom_right``, both inclusive.

    A rectangle is empty when either extent is negative; ``Rect.empty()``
    is the canonical empty rectangle.
    """

    x0: int
    y0: int
    x1: int
    y1: int

    @classmethod
    def empty(cls) -> "Rect":
        return cls(0, 0, -1, -1)

    @classmethod
    def from_corners(cls, a: Position, b: Position) -> "Rect":
        """Rectangle spanning two corners given in any order."""
        return cls(min(a[0], b[0]), min(a[1], b[1]), max(a[0], b[0]), max(a[1], b[1]))

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rect":
        """Rectangle covering a ``width`` x ``height`` grid from the origin."""
        if width <= 0 or height <= 0:
            return cls.empty()
        return cls(0, 0, width - 1, height - 1)

    @classmethod
    def from_center_radius(cls, center: Position, radius: int,
                           bounds: Optional[Tuple[int, int]] = None) -> "Rect":
        """
        Square of half-size ``radius`` around ``center``.

        Corners are clamped to nonnegative coordinates and, when ``bounds``
        (width, height) is given, to the last valid cell.
        """
        if radius < 0:
            raise ValueError(f"Radius must be nonnegative, got {radius}")
        cx, cy = int(center[0]), int(center[1])
        x0, y0 = max(cx - radius, 0), max(cy - radius, 0)
        x1, y1 = cx + radius, cy + radius
        if bounds is not None:
            x1 = min(x1, bounds[0] - 1)
            y1 = min(y1, bounds[1] - 1)
        rect = cls(x0, y0, x1, y1)
        return cls.empty() if rect.is_empty else rect

    @property
    def top_left(self) -> Position:
        return (self.x0, self.y0)

    @property
    def bottom_right(self) -> Position:
        return (self.x1, self.y1)

    @property
    def is_empty(self) -> bool:
        return self.x1 < self.x0 or self.y1 < self.y0

    @property
    def width(self) -> int:
        return 0 if self.is_empty else self.x1 - self.x0 + 1

    @property
    def height(self) -> int:
        return 0 if self.is_empty else self.y1 - self.y0 + 1

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, pos: Position) -> bool:
        return self.x0 <= pos[0] <= self.x1 and self.y0 <= pos[1] <= self.y1

    def intersection(self, other: "Rect") -> "Rect":
        rect = Rect(
            max(self.x0, other.x0), max(self.y0, other.y0),
            min(self.x1, other.x1), min(self.y1, other.y1),
        )
        return Rect.empty() if rect.is_empty else rect

    def expand_to(self, pos: Position) -> "Rect":
        """Smallest rectangle containing this one and ``pos``."""
        if self.is_empty:
            return Rect(pos[0], pos[1], pos[0], pos[1])
        return Rect(
            min(self.x0, pos[0]), min(self.y0, pos[1]),
            max(self.x1, pos[0]), max(self.y1, pos[1]),
        )

    def iter_indices(self) -> Iterator[Position]:
        """All positions inside the rectangle, row by row."""
        for y in range(self.y0, self.y1 + 1):
            for x in range(self.x0, self.x1 + 1):
                yield (x, y)

    def to_slices(self) -> Tuple[slice, slice]:
        """``(rows, cols)`` slices selecting this rectangle in a ``(h, w)`` array."""
        if self.is_empty:
            return (slice(0, 0), slice(0, 0))
        return (slice(self.y0, self.y1 + 1), slice(self.x0, self.x1 + 1))
