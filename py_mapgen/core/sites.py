"""Seed sites driving the Voronoi cells."""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np
import structlog

from ..utils.random import Seed, make_rng
from .errors import ConfigurationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class Site:
    """A seed point with a stable id."""

    id: int
    position: Tuple[float, float]

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


class SiteSet:
    """
    Ordered collection of sites with dense ids ``0..n-1``.

    Positions live in a single ``(n, 2)`` float64 array; ``Site`` objects are
    views created on access. Relaxation produces a new SiteSet through
    ``with_positions`` so ids and order never change.
    """

    def __init__(self, positions: np.ndarray):
        positions = np.array(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ConfigurationError(
                f"Site positions must have shape (n, 2), got {positions.shape}"
            )
        self._positions = positions
        self._positions.flags.writeable = False

    @classmethod
    def generate(cls, count: int, grid_width: int, grid_height: int,
                 rng_seed: Seed = None) -> "SiteSet":
        """
        Place ``count`` sites on distinct random cells of the grid.

        Args:
            count: Number of sites
            grid_width: Grid width in cells
            grid_height: Grid height in cells
            rng_seed: Seed for reproducible placement

        Returns:
            New SiteSet

        Raises:
            ConfigurationError: If count is not positive, the grid is empty,
                or there are fewer cells than requested sites
        """
        if grid_width <= 0 or grid_height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {grid_width}x{grid_height}"
            )
        if count <= 0:
            raise ConfigurationError(f"Site count must be positive, got {count}")
        n_cells = grid_width * grid_height
        if count > n_cells:
            raise ConfigurationError(
                f"Cannot place {count} distinct sites on a "
                f"{grid_width}x{grid_height} grid ({n_cells} cells)"
            )

        rng = make_rng(rng_seed)
        flat = rng.choice(n_cells, size=count, replace=False)
        positions = np.column_stack([flat % grid_width, flat // grid_width])

        logger.debug("Sites generated", count=count, seed=rng_seed)
        return cls(positions.astype(np.float64))

    @classmethod
    def from_positions(cls, positions: Sequence[Sequence[float]]) -> "SiteSet":
        """
        Build a SiteSet with ids assigned in input order.

        Raises:
            ConfigurationError: On an empty input, malformed or non-finite
                coordinates, or duplicate positions
        """
        try:
            array = np.asarray(positions, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid site positions: {e}") from e

        if array.size == 0:
            raise ConfigurationError("At least one site position is required")
        if array.ndim != 2 or array.shape[1] != 2:
            raise ConfigurationError(
                f"Site positions must be (x, y) pairs, got shape {array.shape}"
            )
        if not np.all(np.isfinite(array)):
            raise ConfigurationError("Site positions must be finite")

        unique, counts = np.unique(array, axis=0, return_counts=True)
        if len(unique) != len(array):
            duplicates = [tuple(p) for p in unique[counts > 1]]
            raise ConfigurationError(f"Duplicate site positions: {duplicates}")

        return cls(array)

    @property
    def positions(self) -> np.ndarray:
        """Read-only ``(n, 2)`` array of site positions in id order."""
        return self._positions

    def with_positions(self, positions: np.ndarray) -> "SiteSet":
        """Same ids, new positions."""
        positions = np.asarray(positions, dtype=np.float64)
        if positions.shape != self._positions.shape:
            raise ValueError(
                f"Expected positions of shape {self._positions.shape}, got {positions.shape}"
            )
        return SiteSet(positions)

    def copy(self) -> "SiteSet":
        return SiteSet(self._positions.copy())

    def __len__(self) -> int:
        return len(self._positions)

    def __getitem__(self, site_id: int) -> Site:
        if not 0 <= site_id < len(self):
            raise IndexError(f"Site id {site_id} out of range")
        x, y = self._positions[site_id]
        return Site(id=int(site_id), position=(float(x), float(y)))

    def __iter__(self) -> Iterator[Site]:
        for i in range(len(self)):
            yield self[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SiteSet):
            return NotImplemented
        return np.array_equal(self._positions, other._positions)

    def __repr__(self) -> str:
        return f"SiteSet(n={len(self)})"
