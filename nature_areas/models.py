from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional, Union

WGS84_LABEL = "EPSG:4326 (WGS84)"


class UpstreamModel(BaseModel):
    """Base for models built from upstream JSON with Swedish field names."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


# Naturvårdsregistret (NVR) models
class ProtectedArea(UpstreamModel):
    id: str
    name: Optional[str] = Field(None, validation_alias="namn")
    type: Optional[str] = Field(None, validation_alias="skyddstyp")
    decision_status: Optional[str] = Field(None, validation_alias="beslutsstatus")
    area_ha: Optional[float] = Field(None, validation_alias="areaHa")
    land_area_ha: Optional[float] = Field(None, validation_alias="landareaHa")
    water_area_ha: Optional[float] = Field(None, validation_alias="vattenareaHa")
    forest_area_ha: Optional[float] = Field(None, validation_alias="skogAreaHa")
    decision_date: Optional[str] = Field(None, validation_alias="beslutsdatum")
    valid_date: Optional[str] = Field(None, validation_alias="gallandedatum")
    original_decision_date: Optional[str] = Field(None, validation_alias="ursprBeslutsdatum")
    regulation_effective_date: Optional[str] = Field(None, validation_alias="ikrafttradandedatumForeskrifter")
    county: Optional[str] = Field(None, validation_alias="lanAsText")
    municipalities: Optional[str] = Field(None, validation_alias="kommunerAsText")
    manager: Optional[str] = Field(None, validation_alias="forvaltare")
    decision_authority: Optional[str] = Field(None, validation_alias="beslutsmyndighet")
    supervisory_authority: Optional[str] = Field(None, validation_alias="tillsynsmyndighet")
    permit_authority: Optional[str] = Field(None, validation_alias="provningsmyndighetTillstand")
    exemption_authority: Optional[str] = Field(None, validation_alias="provningsmyndighetDispens")
    iucn_category: Optional[str] = Field(None, validation_alias="iucnKategori")
    decision_type: Optional[str] = Field(None, validation_alias="beslutstyp")
    description: Optional[str] = Field(None, validation_alias="beskrivning")


class Purpose(UpstreamModel):
    name: Optional[str] = Field(None, validation_alias="namn")
    description: Optional[str] = Field(None, validation_alias="beskrivning")


class LandCover(UpstreamModel):
    name: Optional[str] = Field(None, validation_alias="namn")
    code: Optional[str] = Field(None, validation_alias="kod")
    area_ha: Optional[float] = Field(None, validation_alias="areaHa")


class EnvironmentalGoal(UpstreamModel):
    name: Optional[str] = Field(None, validation_alias="namn")


class Regulation(UpstreamModel):
    type: Optional[str] = Field(None, validation_alias="foreskriftstyp")
    subtype: Optional[str] = Field(None, validation_alias="foreskriftssubtyp")
    area_ha: Optional[float] = Field(None, validation_alias="areaHa")


class Document(UpstreamModel):
    id: Optional[str] = None
    name: Optional[str] = Field(None, validation_alias="namn")
    file_url: Optional[str] = Field(None, validation_alias="fileUrl")
    decision_type: Optional[str] = Field(None, validation_alias="beslutstyp")
    decision_authority: Optional[str] = Field(None, validation_alias="beslutsmyndighet")
    # Epoch milliseconds upstream
    decision_date: Optional[Union[int, str]] = Field(None, validation_alias="beslutsdatum")
    valid_date: Optional[Union[int, str]] = Field(None, validation_alias="gallandedatum")


# Natura 2000 models
class N2000Area(UpstreamModel):
    kod: str
    name: Optional[str] = Field(None, validation_alias="namn")
    area_type: Optional[str] = Field(None, validation_alias="omradestypkod")
    county: Optional[str] = Field(None, validation_alias="lan")
    municipalities: Optional[str] = Field(None, validation_alias="kommun")
    area_ha: Optional[float] = Field(None, validation_alias="areaHa")
    land_area_ha: Optional[float] = Field(None, validation_alias="landareaHa")
    water_area_ha: Optional[float] = Field(None, validation_alias="vattenareaHa")
    forest_area_ha: Optional[float] = Field(None, validation_alias="skogAreaHa")
    decision_date: Optional[str] = Field(None, validation_alias="beslutsdatum")
    quality: Optional[str] = Field(None, validation_alias="kvalitet")
    character: Optional[str] = Field(None, validation_alias="karaktar")


class N2000Species(UpstreamModel):
    name: Optional[str] = Field(None, validation_alias="namn")
    group: Optional[str] = Field(None, validation_alias="grupp")


class N2000Habitat(UpstreamModel):
    code: Optional[str] = Field(None, validation_alias="kod")
    name: Optional[str] = Field(None, validation_alias="namn")
    area_ha: Optional[float] = Field(None, validation_alias="areaHa")


class N2000Document(UpstreamModel):
    id: Optional[str] = None
    name: Optional[str] = Field(None, validation_alias="namn")
    file_type: Optional[str] = Field(None, validation_alias="filtyp")
    mime_type: Optional[str] = Field(None, validation_alias="mimetyp")
    file_url: Optional[str] = Field(None, validation_alias="fileUrl")


# Ramsar models
class RamsarArea(UpstreamModel):
    id: str
    name: Optional[str] = Field(None, validation_alias="namn")
    protection_type: Optional[str] = Field(None, validation_alias="skyddstyp")
    nation: Optional[str] = None
    county: Optional[str] = Field(None, validation_alias="lanAsText")
    municipalities: Optional[str] = Field(None, validation_alias="kommunerAsText")
    total_area_ha: Optional[float] = Field(None, validation_alias="totalArealHA")
    shape_area_ha: Optional[float] = Field(None, validation_alias="shapeAreaHA")
    land_area_ha: Optional[float] = Field(None, validation_alias="landHA")
    forest_area_ha: Optional[float] = Field(None, validation_alias="skogHA")
    water_area_ha: Optional[float] = Field(None, validation_alias="vattenHA")
    original_decision: Optional[str] = Field(None, validation_alias="ursprungligtBeslut")
    latest_decision: Optional[str] = Field(None, validation_alias="senastBeslut")
    legal_act: Optional[str] = Field(None, validation_alias="legalAct")


class RamsarLandCover(UpstreamModel):
    ramsar_id: Optional[str] = Field(None, validation_alias="ramsarId")
    code: Optional[str] = Field(None, validation_alias="kod")
    name: Optional[str] = Field(None, validation_alias="namn")
    area_ha: Optional[float] = Field(None, validation_alias="areaHa")


class RamsarProtectionType(UpstreamModel):
    key: Optional[str] = None
    value: Optional[str] = None


# Lookup models
class Municipality(BaseModel):
    code: str
    name: str


class County(BaseModel):
    code: str
    name: str


# Request Models
class AreasExtentRequest(BaseModel):
    """Request model for the combined extent endpoints."""
    area_ids: List[str] = Field(..., min_length=1, max_length=100,
                                description='Area IDs (1-100). Example: ["2000019", "2000140"]')


# Response Models
class AreaListResponse(BaseModel):
    count: int
    areas: List[Any]


class AreaGeometryResponse(BaseModel):
    area_id: str
    status: Optional[str] = None
    geometry: str
    coordinate_system: str = WGS84_LABEL


class AreasExtentResponse(BaseModel):
    area_ids: List[str]
    count: int
    extent: str
    coordinate_system: str = WGS84_LABEL


class LookupResponse(BaseModel):
    type: Literal["municipality", "county"]
    query: str
    count: int
    results: List[Union[Municipality, County]]


class ErrorDetail(BaseModel):
    type: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    upstreams: Dict[str, str]
