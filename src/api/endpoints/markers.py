import logging
from fastapi import APIRouter, Depends, Query

from core.dependencies import get_marker_service
from app.mapcluster.schema import (
    ClusterPointsRequest,
    MarkersResponse,
    PhotoMapRequest,
    PhotoMapResponse,
    RadiusResponse,
)
from app.mapcluster.services.formatters import format_markers, format_statistics
from app.mapcluster.services.markers import MapMarkerService
from app.models.photo import Coordinates, Photo
from app.models.point import GeolocatedItem

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=MarkersResponse)
async def cluster_points(
    req: ClusterPointsRequest,
    service: MapMarkerService = Depends(get_marker_service),
):
    """
    Cluster already-located points for the given zoom level.
    """
    points = [
        GeolocatedItem(id=p.id, latitude=p.latitude, longitude=p.longitude, payload=p.payload)
        for p in req.points
    ]
    markers = service.cluster(points, req.zoom, version=req.version)
    logger.info(f"📍 Clustered {len(points)} points into {len(markers)} markers at zoom {req.zoom}")

    return MarkersResponse(
        markers=format_markers(markers, service.config.preview_limit),
        total_points=len(points),
        total_markers=len(markers),
        radius=service.radius(req.zoom),
        clustered=service.clusters_at(req.zoom),
    )


@router.post("/photos", response_model=PhotoMapResponse)
async def cluster_photos(
    req: PhotoMapRequest,
    service: MapMarkerService = Depends(get_marker_service),
):
    """
    Build map markers from raw photo documents, dropping photos without coordinates.
    """
    photos = [
        Photo(
            id=p.id,
            image_url=p.image_url,
            description=p.description,
            detailed_description=p.detailed_description,
            location=p.location,
            year=p.year,
            author=p.author,
            coordinates=Coordinates(**p.coordinates.model_dump()) if p.coordinates else None,
        )
        for p in req.photos
    ]
    photo_map = service.build_photo_map(
        photos, req.zoom, decade=req.decade, search=req.search, version=req.version
    )

    return PhotoMapResponse(
        markers=format_markers(photo_map.markers, service.config.preview_limit),
        total_points=len(photo_map.points),
        total_markers=len(photo_map.markers),
        radius=photo_map.radius,
        clustered=photo_map.clustered,
        statistics=format_statistics(photo_map.statistics),
        available_decades=photo_map.available_decades,
    )


@router.get("/radius", response_model=RadiusResponse)
async def get_radius(
    zoom: float = Query(..., allow_inf_nan=False),
    service: MapMarkerService = Depends(get_marker_service),
):
    return RadiusResponse(zoom=zoom, radius=service.radius(zoom), clustered=service.clusters_at(zoom))
