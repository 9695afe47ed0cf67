"""Discrete Voronoi partition generation for procedural maps."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import structlog

from ..config import settings
from ..utils.random import Seed
from .assignment import assign
from .borders import apply_borders
from .errors import ConfigurationError
from .grid import BORDER, AssignmentField
from .metric import CustomMetric, Metric, MetricLike, resolve_metric
from .regions import Region, extract
from .relaxation import relax, starved_sites
from .sites import SiteSet

logger = structlog.get_logger()


def _default_metric() -> str:
    return settings.default_metric


def _default_iterations() -> int:
    return settings.default_relax_iterations


@dataclass
class VoronoiConfig:
    """Configuration for one Voronoi generation run.

    Exactly one of ``site_count`` (random placement from ``seed``) and
    ``positions`` (explicit placement) must be given. Borders are disabled
    while ``border_width`` is None.
    """

    width: int
    height: int
    site_count: Optional[int] = None
    positions: Optional[Sequence[Tuple[float, float]]] = None
    metric: MetricLike = field(default_factory=_default_metric)
    seed: Seed = None
    border_width: Optional[float] = None
    curve_borders: bool = False
    curve_radius: Optional[float] = None
    relax_iterations: int = field(default_factory=_default_iterations)
    include_border_region: bool = False

    @property
    def borders_enabled(self) -> bool:
        return self.border_width is not None

    def validate(self) -> None:
        """
        Check the configuration before any computation.

        Raises:
            ConfigurationError: On invalid dimensions, site selection,
                iteration count, border settings or metric
        """
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.width * self.height > settings.max_grid_cells:
            raise ConfigurationError(
                f"Grid of {self.width * self.height} cells exceeds the "
                f"limit of {settings.max_grid_cells}"
            )
        if (self.site_count is None) == (self.positions is None):
            raise ConfigurationError("Give exactly one of site_count and positions")
        if self.relax_iterations < 0:
            raise ConfigurationError(
                f"Relaxation iterations must be nonnegative, got {self.relax_iterations}"
            )
        if self.border_width is not None and self.border_width < 0:
            raise ConfigurationError(
                f"Border width must be nonnegative, got {self.border_width}"
            )
        if self.curve_radius is not None and self.curve_radius <= 0:
            raise ConfigurationError(
                f"Curve radius must be positive, got {self.curve_radius}"
            )
        resolve_metric(self.metric)


@dataclass
class VoronoiResult:
    """Output of a generation run.

    ``regions`` refer to ``field``, which is frozen.
    """

    config: VoronoiConfig
    input_sites: SiteSet
    output_sites: SiteSet
    field: AssignmentField
    regions: List[Region]
    border_region: Optional[Region] = None
    starved_sites: List[int] = field(default_factory=list)
    iterations: int = 0

    @property
    def width(self) -> int:
        return self.field.width

    @property
    def height(self) -> int:
        return self.field.height

    @property
    def border_cells(self) -> int:
        return self.field.count(BORDER)

    def region_for(self, pos: Tuple[int, int]) -> Optional[Region]:
        """The site region owning ``pos``, or None for a border cell."""
        value = self.field[pos]
        if value == BORDER:
            return None
        return self.regions[value]


class VoronoiGenerator:
    """
    Runs the Voronoi pipeline for one configuration.

    sites -> assignment -> borders -> (relax -> assignment -> borders) * N
    -> regions
    """

    def __init__(self, config: VoronoiConfig):
        config.validate()
        self.config = config
        self.metric: Union[Metric, CustomMetric] = resolve_metric(config.metric)

    def build_sites(self) -> SiteSet:
        config = self.config
        if config.positions is not None:
            return SiteSet.from_positions(config.positions)
        return SiteSet.generate(config.site_count, config.width, config.height, config.seed)

    def partition(self, sites: SiteSet) -> AssignmentField:
        """One assignment pass, followed by border shaping when enabled."""
        config = self.config
        field = assign(config.width, config.height, sites, self.metric)
        if config.borders_enabled:
            field = apply_borders(
                field, sites, self.metric, config.border_width,
                curve=config.curve_borders, curve_radius=config.curve_radius,
            )
        return field

    def generate(self) -> VoronoiResult:
        """
        Generate the partition.

        Returns:
            VoronoiResult with one region per site in id order
        """
        config = self.config
        logger.info("Generating Voronoi partition",
                    width=config.width, height=config.height,
                    metric=repr(self.metric),
                    seed=config.seed, borders=config.borders_enabled,
                    relax_iterations=config.relax_iterations)

        input_sites = self.build_sites()
        sites = input_sites
        field = self.partition(sites)

        starved = set()
        for iteration in range(config.relax_iterations):
            starved.update(starved_sites(field, len(sites)))
            sites = relax(field, sites)
            field = self.partition(sites)
            logger.info(f"Relaxation iteration {iteration + 1} complete")

        regions = extract(field, sites, include_border=config.include_border_region)
        border_region = regions.pop() if config.include_border_region else None

        logger.info("Voronoi partition generated",
                    sites=len(sites), border_cells=field.count(BORDER),
                    starved_sites=len(starved))

        return VoronoiResult(
            config=config,
            input_sites=input_sites,
            output_sites=sites,
            field=field,
            regions=regions,
            border_region=border_region,
            starved_sites=sorted(starved),
            iterations=config.relax_iterations,
        )


def generate_voronoi(config: VoronoiConfig) -> VoronoiResult:
    """Generate a Voronoi partition from ``config``."""
    return VoronoiGenerator(config).generate()
