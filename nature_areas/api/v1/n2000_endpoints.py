import logging
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request

from ...clients.n2000_client import N2000Client
from ...concurrency import run_with_concurrency
from ...dependencies import get_n2000_client
from ...models import (
    AreaGeometryResponse, AreaListResponse, AreasExtentRequest, AreasExtentResponse, WGS84_LABEL,
)
from ...rate_limit import limiter, rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/n2000", tags=["natura2000"])

IncludeType = Literal["geometry", "species", "habitats", "land_cover", "documents", "all"]


@router.get("/areas", response_model=AreaListResponse, summary="Search Natura 2000 areas")
@limiter.limit(rate_limit)
async def list_n2000_areas(
    request: Request,
    kommun: Optional[str] = Query(None, description="Municipality code, 4 digits"),
    lan: Optional[str] = Query(None, description="County code, 1-2 letters"),
    namn: Optional[str] = Query(None, description="Area name, partial match"),
    artnamn: Optional[str] = Query(None, description="Species name (Latin or Swedish)"),
    naturtypkod: Optional[str] = Query(None, description="Habitat type code, e.g. '9010'"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Max areas to return (default 100)"),
    client: N2000Client = Depends(get_n2000_client),
):
    """Search EU-protected Natura 2000 sites by location, name, species or habitat."""
    areas = await client.list_areas(
        kommun=kommun, lan=lan, namn=namn, artnamn=artnamn, naturtypkod=naturtypkod, limit=limit
    )
    return AreaListResponse(count=len(areas), areas=areas)


@router.post("/areas/extent", response_model=AreasExtentResponse,
             summary="Combined bounding box of several Natura 2000 areas")
@limiter.limit(rate_limit)
async def get_areas_extent(
    request: Request,
    extent_request: AreasExtentRequest,
    client: N2000Client = Depends(get_n2000_client),
):
    extent = await client.get_areas_extent(extent_request.area_ids)
    return AreasExtentResponse(
        area_ids=extent_request.area_ids,
        count=len(extent_request.area_ids),
        extent=extent,
    )


@router.get("/species", summary="Species covered by Natura 2000")
@limiter.limit(rate_limit)
async def list_species(
    request: Request,
    group: Optional[str] = Query(None, description="Species group, e.g. 'Fåglar'"),
    client: N2000Client = Depends(get_n2000_client),
) -> Dict[str, Any]:
    if group:
        species = await client.get_species_by_group(group)
    else:
        species = await client.get_all_species()
    return {"group": group, "count": len(species), "species": species}


@router.get("/habitats", summary="Habitat types covered by Natura 2000")
@limiter.limit(rate_limit)
async def list_habitats(request: Request, client: N2000Client = Depends(get_n2000_client)) -> Dict[str, Any]:
    habitats = await client.get_all_habitats()
    return {"count": len(habitats), "habitats": habitats}


@router.get("/area-types", summary="Natura 2000 area type codes")
@limiter.limit(rate_limit)
async def list_area_types(request: Request, client: N2000Client = Depends(get_n2000_client)) -> Dict[str, Any]:
    area_types = await client.get_area_types()
    return {"count": len(area_types), "area_types": area_types}


@router.get("/areas/{kod}", summary="Natura 2000 area detail")
@limiter.limit(rate_limit)
async def get_area_detail(
    request: Request,
    kod: str,
    include: IncludeType = Query("all", description="Which part of the detail to fetch"),
    client: N2000Client = Depends(get_n2000_client),
) -> Dict[str, Any]:
    """
    Area detail with the requested sub-resources.

    With include=all the five sub-resources are fetched at most two at a time.
    """
    area = await client.get_area(kod)
    result: Dict[str, Any] = {
        "kod": kod,
        "area": area,
        "coordinate_system": WGS84_LABEL,
    }

    fetchers: List[Tuple[str, Callable[[], Awaitable[Any]]]] = [
        ("geometry", lambda: client.get_area_wkt(kod)),
        ("species", lambda: client.get_area_species(kod)),
        ("habitats", lambda: client.get_area_habitats(kod)),
        ("land_cover", lambda: client.get_area_land_cover(kod)),
        ("documents", lambda: client.get_area_documents(kod)),
    ]
    selected = [(key, fetch) for key, fetch in fetchers if include in ("all", key)]

    values = await run_with_concurrency([fetch for _, fetch in selected])
    for (key, _), value in zip(selected, values):
        result[key] = value

    return result


@router.get("/areas/{kod}/geometry", response_model=AreaGeometryResponse, summary="Area geometry as WGS84 WKT")
@limiter.limit(rate_limit)
async def get_area_geometry(request: Request, kod: str, client: N2000Client = Depends(get_n2000_client)):
    geometry = await client.get_area_wkt(kod)
    return AreaGeometryResponse(area_id=kod, geometry=geometry)
