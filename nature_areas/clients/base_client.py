"""
Base upstream client shared by the NVR, Natura 2000 and Ramsar adapters
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Type, TypeVar

from pydantic import BaseModel

from .http_client import UpstreamHttpClient
from ..exceptions import UpstreamTransportError
from ..services.extent_service import get_areas_extent
from ..wkt_utils import reproject_wkt

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseAreaClient(ABC):
    """
    Abstract base for an upstream protected-area API.

    Subclasses supply the raw geometry and bulk-extent endpoints; the base
    class reprojects geometry to WGS84 and owns the extent fallback so all
    three sources behave identically.
    """

    def __init__(self, http: UpstreamHttpClient):
        self.http = http

    @property
    def name(self) -> str:
        return self.http.api_name

    @abstractmethod
    async def fetch_raw_wkt(self, area_id: str) -> str:
        """Single area geometry as returned upstream (SWEREF99 TM)"""
        pass

    @abstractmethod
    async def fetch_bulk_extent(self, area_ids: Sequence[str]) -> Any:
        """Upstream extentAsWkt answer for several areas (SWEREF99 TM)"""
        pass

    async def get_area_wkt(self, area_id: str) -> str:
        """Area geometry as WGS84 WKT"""
        return self._reproject(await self.fetch_raw_wkt(area_id))

    def _reproject(self, raw_wkt: Any) -> str:
        # A JSON body here is an upstream error envelope, not geometry
        if not isinstance(raw_wkt, str):
            raise UpstreamTransportError(self.name, "geometry response is not WKT text")
        return reproject_wkt(raw_wkt)

    async def get_areas_extent(self, area_ids: Sequence[str]) -> str:
        """Combined bounding box of several areas as WGS84 WKT"""
        return await get_areas_extent(
            area_ids,
            fetch_bulk_extent=self.fetch_bulk_extent,
            fetch_area_wkt=self.get_area_wkt,
            api_name=self.name,
        )

    async def _get_models(self, path: str, model: Type[ModelT], params: Dict[str, Any] = None) -> List[ModelT]:
        data = await self.http.request(path, params=params)
        return [model.model_validate(item) for item in data or []]

    async def _get_model(self, path: str, model: Type[ModelT]) -> ModelT:
        return model.model_validate(await self.http.request(path))

    async def close(self):
        await self.http.close()
