import hashlib
import json
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from app.config import ClusteringConfig
from app.mapcluster.clusters.base import MarkerClusterer
from app.mapcluster.clusters.greedy import GreedyMarkerClusterer
from app.mapcluster.markers import ClusteredMarker
from app.mapcluster.services.point_source import (
    available_decades,
    filter_by_decade,
    filter_by_location,
    filter_photos_with_coordinates,
)
from app.mapcluster.services.statistics import MapStatistics, compute_map_statistics
from app.models.photo import Photo
from app.models.point import GeolocatedItem
from app.utils.performance import PerformanceMonitor

logger = logging.getLogger(__name__)


@dataclass
class PhotoMap:
    markers: List[ClusteredMarker]
    points: List[GeolocatedItem]
    statistics: MapStatistics
    available_decades: List[int]
    radius: float
    clustered: bool


def points_fingerprint(points: Sequence[GeolocatedItem]) -> str:
    """Content hash of a point sequence, in input order."""
    hash_md5 = hashlib.md5()
    for p in points:
        record = [p.id, p.latitude, p.longitude, p.payload]
        hash_md5.update(json.dumps(record, sort_keys=True, default=str).encode("utf-8"))
        hash_md5.update(b"\n")
    return hash_md5.hexdigest()


class MarkerCache:
    """Bounded LRU of marker tuples keyed by (point set version, zoom, ...)."""

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._entries: "OrderedDict[Tuple, Tuple[ClusteredMarker, ...]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Tuple) -> Optional[Tuple[ClusteredMarker, ...]]:
        with self._lock:
            markers = self._entries.get(key)
            if markers is not None:
                self._entries.move_to_end(key)
            return markers

    def put(self, key: Tuple, markers: Sequence[ClusteredMarker]) -> None:
        if self.max_size <= 0:
            return
        with self._lock:
            self._entries[key] = tuple(markers)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class MapMarkerService:
    def __init__(self, config: Optional[ClusteringConfig] = None, clusterer: Optional[MarkerClusterer] = None):
        self.config = config or ClusteringConfig()
        self.clusterer = clusterer or GreedyMarkerClusterer(self.config)
        self.cache = MarkerCache(self.config.cache_size)

    def radius(self, zoom: float) -> float:
        return self.clusterer.radius(zoom)

    def clusters_at(self, zoom: float) -> bool:
        return self.clusterer.clusters_at(zoom)

    def cluster(
        self,
        points: Sequence[GeolocatedItem],
        zoom: float,
        version: Optional[Hashable] = None,
        cache_key: Tuple = (),
    ) -> List[ClusteredMarker]:
        """
        Runs the clusterer, memoizing by (version, zoom) when a version is given.

        The key also carries a fingerprint of the points, so callers reusing
        a version for a different point set never share entries.
        """
        key = None
        if version is not None:
            key = (version, zoom, points_fingerprint(points)) + tuple(cache_key)
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Marker cache hit for version={version} zoom={zoom}")
                return list(cached)

        if len(points) > self.config.warn_point_count:
            logger.warning(
                f"⚠️ Clustering {len(points)} points (threshold {self.config.warn_point_count}). "
                f"Greedy clustering is quadratic in point count."
            )

        with PerformanceMonitor() as monitor:
            markers = self.clusterer.cluster(points, zoom)
        monitor.report("cluster_markers", count=len(points))

        if key is not None:
            self.cache.put(key, markers)
        return list(markers)

    def build_photo_map(
        self,
        photos: Iterable[Photo],
        zoom: float,
        decade: Optional[str] = None,
        search: Optional[str] = None,
        version: Optional[Hashable] = None,
    ) -> PhotoMap:
        located = filter_photos_with_coordinates(photos)
        decades = available_decades(located)
        statistics = compute_map_statistics(located, decades)

        points = filter_by_location(filter_by_decade(located, decade), search)
        logger.info(
            f"🗺️ Building photo map: {len(points)}/{len(located)} located photos "
            f"(decade={decade or 'all'}, search={search!r}, zoom={zoom})"
        )

        markers = self.cluster(points, zoom, version=version, cache_key=(decade, search))
        return PhotoMap(
            markers=markers,
            points=points,
            statistics=statistics,
            available_decades=decades,
            radius=self.radius(zoom),
            clustered=self.clusters_at(zoom),
        )
