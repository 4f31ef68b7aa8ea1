import logging
from typing import List, Optional, Sequence

import numpy as np

from app.config import ClusteringConfig
from app.mapcluster.clusters.base import MarkerClusterer
from app.mapcluster.markers import (
    ClusteredMarker,
    ClusterGroup,
    IndividualMarker,
    group_to_marker,
)
from app.models.point import GeolocatedItem

logger = logging.getLogger(__name__)


def get_cluster_radius(zoom: float, config: Optional[ClusteringConfig] = None) -> float:
    """
    Maps a zoom level to a clustering radius in coordinate degrees.
    Higher zoom = smaller radius (more granular clustering).
    """
    config = config or ClusteringConfig()
    for min_zoom, radius in config.radius_tiers:
        if zoom >= min_zoom:
            return radius
    return config.fallback_radius


def euclidean_distance(lat1, lng1, lat2, lng2):
    """
    Planar distance between coordinate pairs, in degrees.

    Accepts scalars or numpy arrays. The radius tiers are calibrated against
    this flat approximation, so a geodesic formula cannot be dropped in
    without recalibrating them.
    """
    return np.sqrt((lat1 - lat2) ** 2 + (lng1 - lng2) ** 2)


class GreedyMarkerClusterer(MarkerClusterer):
    """
    Single-pass, seed-based clustering.

    Each unprocessed point (in input order) seeds a group and absorbs every
    later unprocessed point lying strictly within the radius of the seed.
    Membership is never chained through other members, and the result
    depends on input order. Cost is O(n^2) in the worst case.
    """

    def __init__(self, config: Optional[ClusteringConfig] = None):
        self.config = config or ClusteringConfig()

    def radius(self, zoom: float) -> float:
        return get_cluster_radius(zoom, self.config)

    def clusters_at(self, zoom: float) -> bool:
        return zoom < self.config.individual_zoom

    def cluster(self, points: Sequence[GeolocatedItem], zoom: float) -> List[ClusteredMarker]:
        if not points:
            return []

        # At very high zoom levels, show all individual markers
        if not self.clusters_at(zoom):
            return [IndividualMarker(item=p, position=p.position) for p in points]

        groups = self.group(points, self.radius(zoom))
        logger.debug(f"Clustered {len(points)} points into {len(groups)} groups at zoom {zoom}.")
        return [group_to_marker(g) for g in groups]

    def group(self, points: Sequence[GeolocatedItem], radius: float) -> List[ClusterGroup]:
        coords = np.array([(p.latitude, p.longitude) for p in points], dtype=float).reshape(-1, 2)
        lats, lngs = coords[:, 0], coords[:, 1]
        processed = np.zeros(len(points), dtype=bool)

        groups: List[ClusterGroup] = []
        for i, seed in enumerate(points):
            if processed[i]:
                continue

            # Everything before i is already processed, so i comes out first
            distances = euclidean_distance(lats[i], lngs[i], lats, lngs)
            within = ~processed & (distances < radius)
            within[i] = True
            member_indices = np.flatnonzero(within)
            processed[member_indices] = True

            groups.append(
                ClusterGroup(
                    center=seed.position,
                    members=tuple(points[j] for j in member_indices),
                )
            )
        return groups


def cluster_points(
    points: Sequence[GeolocatedItem],
    zoom: float,
    config: Optional[ClusteringConfig] = None,
) -> List[ClusteredMarker]:
    """Clusters points for a zoom level. Pure: recomputes from scratch on every call."""
    return GreedyMarkerClusterer(config).cluster(points, zoom)
