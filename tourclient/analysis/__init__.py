"""
Listing statistics built on the tour data source.
"""

from tourclient.analysis.types import RegionStats, StatsSummary, TypeStats
from tourclient.analysis.stats import TourStatsCollector

__all__ = [
    # Types
    "RegionStats",
    "StatsSummary",
    "TypeStats",
    # Collector
    "TourStatsCollector",
]
