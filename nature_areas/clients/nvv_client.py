"""
Client for Naturvårdsregistret (NVR), the national registry of protected areas

Per-area resources are keyed by area id and decision status
('Gällande', 'Överklagat' or 'Beslutat').
"""
import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

from .base_client import BaseAreaClient
from .http_client import UpstreamHttpClient
from ..models import Document, EnvironmentalGoal, LandCover, ProtectedArea, Purpose, Regulation

logger = logging.getLogger(__name__)

DEFAULT_DECISION_STATUS = "Gällande"


class NVVClient(BaseAreaClient):
    """Client for the NVR REST API (rest/v3)"""

    def __init__(self, http: UpstreamHttpClient, default_status: str = DEFAULT_DECISION_STATUS,
                 default_limit: int = 100):
        super().__init__(http)
        self.default_status = default_status
        self.default_limit = default_limit

    def _area_path(self, area_id: str, status: Optional[str], resource: str) -> str:
        status = status or self.default_status
        return f"/omrade/{quote(area_id, safe='')}/{quote(status, safe='')}/{resource}"

    async def list_areas(self, kommun: Optional[str] = None, lan: Optional[str] = None,
                         namn: Optional[str] = None, limit: Optional[int] = None) -> List[ProtectedArea]:
        """List protected areas by municipality code, county code or name"""
        areas = await self._get_models("/omrade/nolinks", ProtectedArea, params={
            "kommun": kommun,
            "lan": lan,
            "namn": namn,
            "limit": limit or self.default_limit,
        })
        logger.info(f"NVR list: {len(areas)} areas (kommun={kommun}, lan={lan}, namn={namn})")
        return areas

    async def fetch_raw_wkt(self, area_id: str, status: Optional[str] = None) -> str:
        return await self.http.request(self._area_path(area_id, status, "wkt"))

    async def get_area_wkt(self, area_id: str, status: Optional[str] = None) -> str:
        return self._reproject(await self.fetch_raw_wkt(area_id, status))

    async def fetch_bulk_extent(self, area_ids: Sequence[str]) -> Any:
        return await self.http.request("/omrade/extentAsWkt", params={"id": ",".join(area_ids)})

    async def get_area_purposes(self, area_id: str, status: Optional[str] = None) -> List[Purpose]:
        return await self._get_models(self._area_path(area_id, status, "syften"), Purpose)

    async def get_area_land_cover(self, area_id: str, status: Optional[str] = None) -> List[LandCover]:
        return await self._get_models(self._area_path(area_id, status, "nmdklasser"), LandCover)

    async def get_area_environmental_goals(self, area_id: str, status: Optional[str] = None) -> List[EnvironmentalGoal]:
        return await self._get_models(self._area_path(area_id, status, "miljomal"), EnvironmentalGoal)

    async def get_area_regulations(self, area_id: str, status: Optional[str] = None) -> List[Regulation]:
        return await self._get_models(self._area_path(area_id, status, "foreskriftsomraden"), Regulation)

    async def get_area_documents(self, area_id: str, status: Optional[str] = None) -> List[Document]:
        """Decision documents and management plans (PDF links)"""
        return await self._get_models(self._area_path(area_id, status, "beslutsdokument"), Document)
