"""
Core Voronoi partitioning functionality.
"""

from .errors import ConfigurationError, DegenerateStateWarning
from .metric import Metric, CustomMetric, resolve_metric
from .sites import Site, SiteSet
from .rect import Rect
from .grid import AssignmentField, BORDER
from .assignment import assign, nearest_two
from .borders import apply_borders, border_curve
from .relaxation import relax, accumulate_centroids, starved_sites
from .regions import Region, extract, bounding_rect_of
from .voronoi import VoronoiConfig, VoronoiGenerator, VoronoiResult, generate_voronoi

__all__ = ['ConfigurationError', 'DegenerateStateWarning',
           'Metric', 'CustomMetric', 'resolve_metric',
           'Site', 'SiteSet', 'Rect', 'AssignmentField', 'BORDER',
           'assign', 'nearest_two', 'apply_borders', 'border_curve',
           'relax', 'accumulate_centroids', 'starved_sites',
           'Region', 'extract', 'bounding_rect_of',
           'VoronoiConfig', 'VoronoiGenerator', 'VoronoiResult', 'generate_voronoi']
