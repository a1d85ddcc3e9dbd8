from typing import Literal

from fastapi import APIRouter, Query, Request

from ...lookup import MAX_MUNICIPALITY_RESULTS, lookup_counties, lookup_municipalities
from ...models import LookupResponse
from ...rate_limit import limiter, rate_limit

router = APIRouter(prefix="/v1/lookup", tags=["lookup"])


def _municipality_response(query: str) -> LookupResponse:
    matches = lookup_municipalities(query)
    # count is the total number of matches, results are capped
    return LookupResponse(
        type="municipality", query=query, count=len(matches), results=matches[:MAX_MUNICIPALITY_RESULTS]
    )


def _county_response(query: str) -> LookupResponse:
    matches = lookup_counties(query)
    return LookupResponse(type="county", query=query, count=len(matches), results=matches)


@router.get("/municipalities", response_model=LookupResponse, summary="Find municipality codes by name")
@limiter.limit(rate_limit)
async def find_municipalities(
    request: Request,
    query: str = Query(..., min_length=1, description="Municipality name or part of it, e.g. 'Göteborg'"),
):
    """Municipality codes (4 digits) for use as the `kommun` filter. At most 20 results."""
    return _municipality_response(query)


@router.get("/counties", response_model=LookupResponse, summary="Find county codes by name")
@limiter.limit(rate_limit)
async def find_counties(
    request: Request,
    query: str = Query(..., min_length=1, description="County name or part of it, e.g. 'Skåne'"),
):
    """County codes (1-2 letters) for use as the `lan` filter."""
    return _county_response(query)


@router.get("/", response_model=LookupResponse, summary="Find municipality or county codes by name")
@limiter.limit(rate_limit)
async def lookup(
    request: Request,
    type: Literal["municipality", "county"] = Query(..., description="What to look up"),
    name: str = Query(..., min_length=1, description="Name or part of it"),
):
    if type == "municipality":
        return _municipality_response(name)
    return _county_response(name)
