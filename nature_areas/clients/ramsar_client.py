"""Client for Ramsar wetlands of international importance"""
import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

from .base_client import BaseAreaClient
from .http_client import UpstreamHttpClient
from ..models import RamsarArea, RamsarLandCover, RamsarProtectionType

logger = logging.getLogger(__name__)


class RamsarClient(BaseAreaClient):

    def __init__(self, http: UpstreamHttpClient, default_limit: int = 100):
        super().__init__(http)
        self.default_limit = default_limit

    async def list_areas(self, kommun: Optional[str] = None, lan: Optional[str] = None,
                         namn: Optional[str] = None, id: Optional[str] = None,
                         limit: Optional[int] = None) -> List[RamsarArea]:
        areas = await self._get_models("/ramsar/nolinks", RamsarArea, params={
            "kommun": kommun,
            "lan": lan,
            "namn": namn,
            "id": id,
            "limit": limit or self.default_limit,
        })
        logger.info(f"Ramsar list returned {len(areas)} areas")
        return areas

    async def get_area(self, area_id: str) -> RamsarArea:
        return await self._get_model(f"/ramsar/{quote(area_id, safe='')}", RamsarArea)

    async def fetch_raw_wkt(self, area_id: str) -> str:
        return await self.http.request(f"/ramsar/{quote(area_id, safe='')}/wkt")

    async def fetch_bulk_extent(self, area_ids: Sequence[str]) -> Any:
        return await self.http.request("/ramsar/extentAsWkt", params={"id": ",".join(area_ids)})

    async def get_area_land_cover(self, area_id: str) -> List[RamsarLandCover]:
        return await self._get_models(f"/ramsar/{quote(area_id, safe='')}/nmdklasser", RamsarLandCover)

    async def get_protection_types(self) -> List[RamsarProtectionType]:
        return await self._get_models("/ramsar/skyddstyper/list", RamsarProtectionType)
