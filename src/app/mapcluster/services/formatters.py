from typing import List, Sequence

from app.mapcluster.markers import ClusteredMarker, IndividualMarker
from app.mapcluster.schema import (
    ClusterIcon,
    ClusterMarkerResponse,
    IndividualMarkerResponse,
    MapStatisticsResponse,
    PointResponse,
)
from app.mapcluster.services.statistics import MapStatistics
from app.models.point import GeolocatedItem

# (upper bound exclusive, css class, icon size px)
_ICON_TIERS = [
    (10, "cluster-small", 35),
    (100, "cluster-medium", 40),
]
_LARGE_ICON = ("cluster-large", 45)


def cluster_icon(count: int) -> ClusterIcon:
    """Badge size class for a cluster of ``count`` photos."""
    class_name, size = _LARGE_ICON
    for bound, tier_class, tier_size in _ICON_TIERS:
        if count < bound:
            class_name, size = tier_class, tier_size
            break
    return ClusterIcon(class_name=class_name, size=size)


def _to_point(item: GeolocatedItem) -> PointResponse:
    return PointResponse(
        id=item.id,
        latitude=item.latitude,
        longitude=item.longitude,
        payload=item.payload,
    )


def format_marker(marker: ClusteredMarker, preview_limit: int = 8):
    if isinstance(marker, IndividualMarker):
        return IndividualMarkerResponse(position=marker.position, item=_to_point(marker.item))

    members = marker.cluster.members
    view_all_location = None
    # The popup lists only a preview; a link covers the rest
    if marker.count > preview_limit:
        view_all_location = members[0].payload.get("location") or None

    return ClusterMarkerResponse(
        position=marker.position,
        count=marker.count,
        icon=cluster_icon(marker.count),
        member_ids=[m.id for m in members],
        preview=[_to_point(m) for m in members[:preview_limit]],
        view_all_location=view_all_location,
    )


def format_markers(markers: Sequence[ClusteredMarker], preview_limit: int = 8) -> List:
    """Converts engine markers into response models, preserving order."""
    return [format_marker(m, preview_limit) for m in markers]


def format_statistics(stats: MapStatistics) -> MapStatisticsResponse:
    return MapStatisticsResponse(
        located_photos=stats.located_photos,
        distinct_locations=stats.distinct_locations,
        specific_addresses=stats.specific_addresses,
        decades=stats.decades,
    )
