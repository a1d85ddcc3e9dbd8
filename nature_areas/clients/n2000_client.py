"""Client for the Natura 2000 REST API (EU-designated sites in Sweden)"""
import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

from .base_client import BaseAreaClient
from .http_client import UpstreamHttpClient
from ..models import N2000Area, N2000Document, N2000Habitat, N2000Species, LandCover

logger = logging.getLogger(__name__)


class N2000Client(BaseAreaClient):
    """Natura 2000 areas are keyed by site code, e.g. 'SE0110001'"""

    def __init__(self, http: UpstreamHttpClient, default_limit: int = 100):
        super().__init__(http)
        self.default_limit = default_limit

    @staticmethod
    def _area_path(kod: str, resource: str = "") -> str:
        path = f"/omrade/{quote(kod, safe='')}"
        return f"{path}/{resource}" if resource else path

    async def list_areas(self, kommun: Optional[str] = None, lan: Optional[str] = None,
                         namn: Optional[str] = None, artnamn: Optional[str] = None,
                         naturtypkod: Optional[str] = None, limit: Optional[int] = None) -> List[N2000Area]:
        """Search areas by location, name, species name or habitat code"""
        areas = await self._get_models("/omrade/nolinks", N2000Area, params={
            "kommun": kommun,
            "lan": lan,
            "namn": namn,
            "artnamn": artnamn,
            "naturtypkod": naturtypkod,
            "limit": limit or self.default_limit,
        })
        logger.info(f"Natura 2000 search returned {len(areas)} areas")
        return areas

    async def get_area(self, kod: str) -> N2000Area:
        return await self._get_model(self._area_path(kod), N2000Area)

    async def get_area_species(self, kod: str) -> List[N2000Species]:
        return await self._get_models(self._area_path(kod, "arter"), N2000Species)

    async def get_area_habitats(self, kod: str) -> List[N2000Habitat]:
        return await self._get_models(self._area_path(kod, "naturtyper"), N2000Habitat)

    async def get_area_land_cover(self, kod: str) -> List[LandCover]:
        return await self._get_models(self._area_path(kod, "nmdklasser"), LandCover)

    async def fetch_raw_wkt(self, kod: str) -> str:
        return await self.http.request(self._area_path(kod, "wkt"))

    async def fetch_bulk_extent(self, kods: Sequence[str]) -> Any:
        return await self.http.request("/omrade/extentAsWkt", params={"kod": ",".join(kods)})

    async def get_area_documents(self, kod: str) -> List[N2000Document]:
        return await self._get_models(self._area_path(kod, "dokument"), N2000Document)

    async def get_all_species(self) -> List[N2000Species]:
        return await self._get_models("/arter", N2000Species)

    async def get_species_by_group(self, group: str) -> List[N2000Species]:
        return await self._get_models(f"/arter/{quote(group, safe='')}", N2000Species)

    async def get_all_habitats(self) -> List[N2000Habitat]:
        return await self._get_models("/naturtyper", N2000Habitat)

    async def get_area_types(self) -> List[str]:
        """Area type codes (SPA, SCI, SPA/SCI)"""
        return list(await self.http.request("/omrade/omradestyper") or [])
