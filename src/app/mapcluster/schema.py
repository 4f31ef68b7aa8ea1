from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class PointPayload(BaseModel):
    id: str = Field(description="Stable unique identifier")
    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
    payload: Dict[str, Any] = Field(default_factory=dict, description="Opaque display data")


class ClusterPointsRequest(BaseModel):
    points: List[PointPayload]
    zoom: float = Field(allow_inf_nan=False, description="Map zoom level")
    version: Optional[str] = Field(None, description="Point set version used as memoization key")


class PhotoCoordinatesPayload(BaseModel):
    # Left untyped: documents with bad coordinates are dropped, not rejected
    latitude: Optional[Any] = None
    longitude: Optional[Any] = None
    address: Optional[str] = None


class PhotoPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    image_url: str = Field("", alias="imageUrl")
    description: str = ""
    detailed_description: Optional[str] = Field(None, alias="detailedDescription")
    location: str = ""
    year: str = ""
    author: str = ""
    coordinates: Optional[PhotoCoordinatesPayload] = None


class PhotoMapRequest(BaseModel):
    photos: List[PhotoPayload]
    zoom: float = Field(allow_inf_nan=False, description="Map zoom level")
    decade: Optional[str] = Field(None, description="Decade start year, or 'all'")
    search: Optional[str] = Field(None, description="Location/address substring")
    version: Optional[str] = Field(None, description="Photo set version used as memoization key")


class PointResponse(BaseModel):
    id: str
    latitude: float
    longitude: float
    payload: Dict[str, Any] = Field(default_factory=dict)


class ClusterIcon(BaseModel):
    class_name: str
    size: int


class IndividualMarkerResponse(BaseModel):
    type: Literal["individual"] = "individual"
    position: Tuple[float, float]
    item: PointResponse


class ClusterMarkerResponse(BaseModel):
    type: Literal["cluster"] = "cluster"
    position: Tuple[float, float]
    count: int
    icon: ClusterIcon
    member_ids: List[str]
    preview: List[PointResponse]
    view_all_location: Optional[str] = None


MarkerResponse = Annotated[
    Union[IndividualMarkerResponse, ClusterMarkerResponse],
    Field(discriminator="type"),
]


class MarkersResponse(BaseModel):
    markers: List[MarkerResponse]
    total_points: int
    total_markers: int
    radius: float
    clustered: bool


class MapStatisticsResponse(BaseModel):
    located_photos: int
    distinct_locations: int
    specific_addresses: int
    decades: int


class PhotoMapResponse(MarkersResponse):
    statistics: MapStatisticsResponse
    available_decades: List[int]


class RadiusResponse(BaseModel):
    zoom: float
    radius: float
    clustered: bool
