"""
Aggregate listing counts per region and per content type.

Counts come from totalCount of one-row areaBasedList2 queries issued
concurrently. A region or type whose count cannot be fetched is reported
as 0 so one failing query does not sink the whole dashboard.
"""

import asyncio

from loguru import logger

from tourclient.analysis.types import RegionStats, StatsSummary, TypeStats
from tourclient.datasource.tour.models import CONTENT_TYPE_NAMES, ContentType
from tourclient.datasource.tour.source import TourApiSource
from tourclient.services.errors import ServiceError


class TourStatsCollector:
    """
    Builds region/type statistics from a TourApiSource.

    Usage:
        collector = TourStatsCollector(source)
        summary = await collector.summary()
    """

    def __init__(self, source: TourApiSource, region_limit: int = 10):
        self.source = source
        self.region_limit = region_limit

    async def _safe_count(
        self,
        label: str,
        area_code: str | None = None,
        content_type_id: ContentType | None = None,
    ) -> int:
        try:
            return await self.source.count_by_area(area_code, content_type_id)
        except ServiceError as e:
            logger.warning(f"Failed to count listings for {label}: {e}")
            return 0

    async def region_stats(self, limit: int | None = None) -> list[RegionStats]:
        """Listing counts for the first `limit` regions, highest count first."""
        regions = await self.source.list_regions()
        regions = regions[: self.region_limit if limit is None else limit]
        logger.info(f"Collecting listing counts for {len(regions)} regions")

        counts = await asyncio.gather(
            *(self._safe_count(f"region {r.name}", area_code=r.code) for r in regions)
        )

        stats = [
            RegionStats(code=region.code, name=region.name, count=count)
            for region, count in zip(regions, counts)
        ]
        stats.sort(key=lambda s: s.count, reverse=True)
        return stats

    async def type_stats(self) -> list[TypeStats]:
        """Listing counts and percentages for every content type."""
        types = list(ContentType)
        counts = await asyncio.gather(
            *(self._safe_count(f"type {t.label}", content_type_id=t) for t in types)
        )

        total = sum(counts)
        stats = [
            TypeStats(
                type_id=type_id,
                type_name=CONTENT_TYPE_NAMES[type_id],
                count=count,
                percentage=(count / total) * 100 if total > 0 else 0.0,
            )
            for type_id, count in zip(types, counts)
        ]
        stats.sort(key=lambda s: s.count, reverse=True)
        return stats

    async def summary(self, top: int = 3) -> StatsSummary:
        """Total listing count plus the top regions and types."""
        region_stats, type_stats = await asyncio.gather(
            self.region_stats(),
            self.type_stats(),
        )

        total_from_regions = sum(s.count for s in region_stats)
        total_from_types = sum(s.count for s in type_stats)

        summary = StatsSummary(
            total_count=max(total_from_regions, total_from_types),
            top_regions=region_stats[:top],
            top_types=type_stats[:top],
        )
        logger.info(f"Stats summary built: {summary.total_count} listings")
        return summary
