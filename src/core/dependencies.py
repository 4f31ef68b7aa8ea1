from functools import lru_cache

from app.config import ClusteringConfig
from app.mapcluster.services.markers import MapMarkerService
from core.config import configs


@lru_cache()
def get_marker_service() -> MapMarkerService:
    # Shared instance so the marker cache survives across requests
    config = ClusteringConfig(
        warn_point_count=configs.CLUSTER_WARN_POINT_COUNT,
        cache_size=configs.MARKER_CACHE_SIZE,
    )
    return MapMarkerService(config)
