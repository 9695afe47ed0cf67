"""Error types raised by the Voronoi pipeline."""

from typing import Iterable, Tuple


class ConfigurationError(ValueError):
    """Invalid input parameters, detected before any computation begins."""


class DegenerateStateWarning(UserWarning):
    """A relaxation step left one or more sites without any assigned cells.

    Generation continues; the starved sites keep their previous positions.
    """

    def __init__(self, site_ids: Iterable[int]):
        self.site_ids: Tuple[int, ...] = tuple(int(i) for i in site_ids)
        super().__init__(
            f"{len(self.site_ids)} site(s) have no assigned cells: {list(self.site_ids)}"
        )
