"""
Extent resolution for multiple protected areas

The upstream extentAsWkt endpoints fail (HTTP 500, ORA-28579) when given more
than one identifier. Each call first tries the upstream endpoint and, when it
errors or returns something other than a WKT polygon, computes the combined
bounding box locally from the individual area geometries. The upstream
endpoint is tried on every call so a fix on their side is picked up without a
deploy.
"""
import logging
from typing import Awaitable, Callable, Sequence

from ..concurrency import UPSTREAM_CONCURRENCY, run_with_concurrency
from ..exceptions import UpstreamTransportError
from ..wkt_utils import (
    bounding_box_to_wkt,
    combine_bounding_boxes,
    extract_bounding_box,
    reproject_wkt,
)

logger = logging.getLogger(__name__)

BulkExtentFetcher = Callable[[Sequence[str]], Awaitable[object]]
AreaWktFetcher = Callable[[str], Awaitable[str]]


def is_valid_extent_response(result: object) -> bool:
    """Upstream extent answers are usable only when they are WKT polygons"""
    return isinstance(result, str) and result.startswith("POLYGON")


async def compute_extent_client_side(area_ids: Sequence[str], fetch_area_wkt: AreaWktFetcher) -> str:
    """Combined WGS84 extent from per-area geometries.

    ``fetch_area_wkt`` must return WGS84 WKT; the bounding box is computed in
    that space. A single failed fetch fails the whole computation.
    """
    wkt_results = await run_with_concurrency(
        [lambda area_id=area_id: fetch_area_wkt(area_id) for area_id in area_ids],
        UPSTREAM_CONCURRENCY,
    )

    boxes = [extract_bounding_box(wkt) for wkt in wkt_results]
    return bounding_box_to_wkt(combine_bounding_boxes(boxes))


async def get_areas_extent(
    area_ids: Sequence[str],
    fetch_bulk_extent: BulkExtentFetcher,
    fetch_area_wkt: AreaWktFetcher,
    api_name: str = "upstream",
) -> str:
    """Combined extent of ``area_ids`` as WGS84 WKT.

    ``fetch_bulk_extent`` returns the raw (SWEREF99 TM) upstream answer;
    ``fetch_area_wkt`` returns one area's geometry already in WGS84.
    """
    try:
        result = await fetch_bulk_extent(area_ids)
    except UpstreamTransportError as e:
        logger.warning(
            f"{api_name} extent endpoint failed for {len(area_ids)} areas, computing client-side",
            extra={"event": "extent_fallback", "reason": "upstream_error", "error": str(e)}
        )
    else:
        if is_valid_extent_response(result):
            return reproject_wkt(result)
        logger.warning(
            f"{api_name} extent endpoint returned invalid WKT for {len(area_ids)} areas, computing client-side",
            extra={"event": "extent_fallback", "reason": "invalid_wkt"}
        )

    return await compute_extent_client_side(area_ids, fetch_area_wkt)
