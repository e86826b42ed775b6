"""
Tour API client entry point.
Lists the top-level regions and prints a listing statistics summary.
"""

import asyncio
import sys

from loguru import logger

from tourclient.analysis import TourStatsCollector
from tourclient.datasource.tour import close_tour_source, get_tour_source
from tourclient.services.errors import ServiceError, ValidationError, format_error


async def main() -> int:
    """Main function"""
    logger.info("Starting tour API client...")

    try:
        source = get_tour_source()
    except ValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        regions = await source.list_regions()
        for region in regions:
            logger.info(f"Region {region.code}: {region.name}")

        summary = await TourStatsCollector(source).summary()
        logger.info(f"Total listings: {summary.total_count}")
        for stat in summary.top_regions:
            logger.info(f"  {stat.name}: {stat.count}")
        for stat in summary.top_types:
            logger.info(f"  {stat.type_name}: {stat.count} ({stat.percentage:.1f}%)")
        return 0

    except ServiceError as e:
        logger.error(f"Tour API request failed: {e}")
        logger.info(format_error(e))
        return 1
    finally:
        logger.info("Closing HTTP client...")
        await close_tour_source()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
