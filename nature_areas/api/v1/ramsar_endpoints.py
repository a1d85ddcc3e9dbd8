import logging
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, Query, Request

from ...clients.ramsar_client import RamsarClient
from ...dependencies import get_ramsar_client
from ...models import (
    AreaGeometryResponse, AreaListResponse, AreasExtentRequest, AreasExtentResponse, WGS84_LABEL,
)
from ...rate_limit import limiter, rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/ramsar", tags=["ramsar"])

IncludeType = Literal["geometry", "land_cover", "all"]


@router.get("/areas", response_model=AreaListResponse, summary="Search Ramsar wetlands")
@limiter.limit(rate_limit)
async def list_ramsar_areas(
    request: Request,
    kommun: Optional[str] = Query(None, description="Municipality code, 4 digits"),
    lan: Optional[str] = Query(None, description="County code, 1-2 letters"),
    namn: Optional[str] = Query(None, description="Area name, partial match"),
    id: Optional[str] = Query(None, description="Ramsar area id"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Max areas to return (default 100)"),
    client: RamsarClient = Depends(get_ramsar_client),
):
    areas = await client.list_areas(kommun=kommun, lan=lan, namn=namn, id=id, limit=limit)
    return AreaListResponse(count=len(areas), areas=areas)


@router.post("/areas/extent", response_model=AreasExtentResponse,
             summary="Combined bounding box of several Ramsar areas")
@limiter.limit(rate_limit)
async def get_areas_extent(
    request: Request,
    extent_request: AreasExtentRequest,
    client: RamsarClient = Depends(get_ramsar_client),
):
    extent = await client.get_areas_extent(extent_request.area_ids)
    return AreasExtentResponse(
        area_ids=extent_request.area_ids,
        count=len(extent_request.area_ids),
        extent=extent,
    )


@router.get("/protection-types", summary="Ramsar protection types")
@limiter.limit(rate_limit)
async def list_protection_types(request: Request, client: RamsarClient = Depends(get_ramsar_client)) -> Dict[str, Any]:
    protection_types = await client.get_protection_types()
    return {"count": len(protection_types), "protection_types": protection_types}


@router.get("/areas/{area_id}", summary="Ramsar area detail")
@limiter.limit(rate_limit)
async def get_area_detail(
    request: Request,
    area_id: str,
    include: IncludeType = Query("all", description="Which part of the detail to fetch"),
    client: RamsarClient = Depends(get_ramsar_client),
) -> Dict[str, Any]:
    area = await client.get_area(area_id)
    result: Dict[str, Any] = {
        "area_id": area_id,
        "area": area,
        "coordinate_system": WGS84_LABEL,
    }

    if include in ("all", "geometry"):
        result["geometry"] = await client.get_area_wkt(area_id)
    if include in ("all", "land_cover"):
        result["land_cover"] = await client.get_area_land_cover(area_id)

    return result


@router.get("/areas/{area_id}/geometry", response_model=AreaGeometryResponse, summary="Area geometry as WGS84 WKT")
@limiter.limit(rate_limit)
async def get_area_geometry(request: Request, area_id: str, client: RamsarClient = Depends(get_ramsar_client)):
    geometry = await client.get_area_wkt(area_id)
    return AreaGeometryResponse(area_id=area_id, geometry=geometry)
