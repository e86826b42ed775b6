"""
Statistics result types using Pydantic models.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from tourclient.datasource.tour.models import ContentType


class RegionStats(BaseModel):
    """Listing count for one top-level region."""

    code: str
    name: str
    count: int = 0


class TypeStats(BaseModel):
    """Listing count and share for one content type."""

    type_id: ContentType
    type_name: str
    count: int = 0
    percentage: float = 0.0


class StatsSummary(BaseModel):
    """Headline numbers for a statistics dashboard."""

    total_count: int
    top_regions: list[RegionStats] = Field(default_factory=list)
    top_types: list[TypeStats] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=datetime.now)
