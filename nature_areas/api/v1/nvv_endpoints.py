import logging
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, Query, Request

from ...clients.nvv_client import NVVClient
from ...dependencies import get_nvv_client
from ...exceptions import LookupValidationError
from ...models import (
    AreaGeometryResponse, AreaListResponse, AreasExtentRequest, AreasExtentResponse, WGS84_LABEL,
)
from ...rate_limit import limiter, rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/nvv", tags=["nvv"])

IncludeType = Literal["geometry", "purposes", "land_cover", "regulations", "env_goals", "documents", "all"]


def _status_query():
    return Query(None, description="Decision status: 'Gällande' (default), 'Överklagat' or 'Beslutat'")


@router.get("/areas", response_model=AreaListResponse, summary="List protected nature areas")
@limiter.limit(rate_limit)
async def list_protected_areas(
    request: Request,
    kommun: Optional[str] = Query(None, description="Municipality code, 4 digits (e.g. '0180' for Stockholm)"),
    lan: Optional[str] = Query(None, description="County code, 1-2 letters (e.g. 'AB', 'M')"),
    namn: Optional[str] = Query(None, description="Area name, partial match"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Max areas to return (default 100)"),
    client: NVVClient = Depends(get_nvv_client),
):
    """List protected areas by municipality, county or name. At least one filter is required."""
    if not (kommun or lan or namn):
        raise LookupValidationError("At least one search parameter must be provided: kommun, lan, or namn")

    areas = await client.list_areas(kommun=kommun, lan=lan, namn=namn, limit=limit)
    return AreaListResponse(count=len(areas), areas=areas)


@router.post("/areas/extent", response_model=AreasExtentResponse,
             summary="Combined bounding box of several protected areas")
@limiter.limit(rate_limit)
async def get_areas_extent(
    request: Request,
    extent_request: AreasExtentRequest,
    client: NVVClient = Depends(get_nvv_client),
):
    """
    Combined extent of 1-100 areas as a WGS84 POLYGON.

    May take a few seconds: the upstream extent endpoint fails for more than
    one id, and the extent is then computed from each area's geometry.
    """
    extent = await client.get_areas_extent(extent_request.area_ids)
    return AreasExtentResponse(
        area_ids=extent_request.area_ids,
        count=len(extent_request.area_ids),
        extent=extent,
    )


@router.get("/areas/{area_id}", summary="Protected area detail")
@limiter.limit(rate_limit)
async def get_area_detail(
    request: Request,
    area_id: str,
    status: Optional[str] = _status_query(),
    include: IncludeType = Query("all", description="Which part of the detail to fetch"),
    client: NVVClient = Depends(get_nvv_client),
) -> Dict[str, Any]:
    status = status or client.default_status
    result: Dict[str, Any] = {
        "area_id": area_id,
        "status": status,
        "coordinate_system": WGS84_LABEL,
    }

    if include in ("all", "geometry"):
        result["geometry"] = await client.get_area_wkt(area_id, status)
    if include in ("all", "purposes"):
        result["purposes"] = await client.get_area_purposes(area_id, status)
    if include in ("all", "land_cover"):
        result["land_cover"] = await client.get_area_land_cover(area_id, status)
    if include in ("all", "regulations"):
        result["regulations"] = await client.get_area_regulations(area_id, status)
    if include in ("all", "env_goals"):
        result["env_goals"] = await client.get_area_environmental_goals(area_id, status)
    if include in ("all", "documents"):
        result["documents"] = await client.get_area_documents(area_id, status)

    return result


@router.get("/areas/{area_id}/geometry", response_model=AreaGeometryResponse, summary="Area geometry as WGS84 WKT")
@limiter.limit(rate_limit)
async def get_area_geometry(
    request: Request,
    area_id: str,
    status: Optional[str] = _status_query(),
    client: NVVClient = Depends(get_nvv_client),
):
    status = status or client.default_status
    geometry = await client.get_area_wkt(area_id, status)
    return AreaGeometryResponse(area_id=area_id, status=status, geometry=geometry)


@router.get("/areas/{area_id}/purposes", summary="Protection purposes (syften)")
@limiter.limit(rate_limit)
async def get_area_purposes(request: Request, area_id: str, status: Optional[str] = _status_query(),
                            client: NVVClient = Depends(get_nvv_client)) -> Dict[str, Any]:
    status = status or client.default_status
    purposes = await client.get_area_purposes(area_id, status)
    return {"area_id": area_id, "status": status, "count": len(purposes), "purposes": purposes}


@router.get("/areas/{area_id}/land-cover", summary="Land cover classes (NMD)")
@limiter.limit(rate_limit)
async def get_area_land_cover(request: Request, area_id: str, status: Optional[str] = _status_query(),
                              client: NVVClient = Depends(get_nvv_client)) -> Dict[str, Any]:
    status = status or client.default_status
    land_cover = await client.get_area_land_cover(area_id, status)
    return {"area_id": area_id, "status": status, "count": len(land_cover), "land_cover": land_cover}


@router.get("/areas/{area_id}/env-goals", summary="Environmental quality goals (miljömål)")
@limiter.limit(rate_limit)
async def get_area_environmental_goals(request: Request, area_id: str, status: Optional[str] = _status_query(),
                                       client: NVVClient = Depends(get_nvv_client)) -> Dict[str, Any]:
    status = status or client.default_status
    goals = await client.get_area_environmental_goals(area_id, status)
    return {"area_id": area_id, "status": status, "count": len(goals), "env_goals": goals}


@router.get("/areas/{area_id}/regulations", summary="Regulation zones (föreskriftsområden)")
@limiter.limit(rate_limit)
async def get_area_regulations(request: Request, area_id: str, status: Optional[str] = _status_query(),
                               client: NVVClient = Depends(get_nvv_client)) -> Dict[str, Any]:
    status = status or client.default_status
    regulations = await client.get_area_regulations(area_id, status)
    return {"area_id": area_id, "status": status, "count": len(regulations), "regulations": regulations}


@router.get("/areas/{area_id}/documents", summary="Decision documents (beslutsdokument)")
@limiter.limit(rate_limit)
async def get_area_documents(request: Request, area_id: str, status: Optional[str] = _status_query(),
                             client: NVVClient = Depends(get_nvv_client)) -> Dict[str, Any]:
    status = status or client.default_status
    documents = await client.get_area_documents(area_id, status)
    return {"area_id": area_id, "status": status, "count": len(documents), "documents": documents}
