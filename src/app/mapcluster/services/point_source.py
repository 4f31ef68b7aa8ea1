import logging
import math
import re
from numbers import Real
from typing import Iterable, List, Optional, Union

from app.models.photo import Photo
from app.models.point import GeolocatedItem

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _is_valid_coordinate(value, limit: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and -limit <= value <= limit


def parse_year(value) -> Optional[int]:
    """Leading integer of a free-text year ("1965.", "1930-ih"), or None."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def filter_photos_with_coordinates(photos: Iterable[Photo]) -> List[GeolocatedItem]:
    """
    Keeps photos that can be placed on the map and converts them to points.

    A photo qualifies when it has an id and both coordinates are finite
    numbers within latitude/longitude bounds. Input order is preserved.
    """
    items: List[GeolocatedItem] = []
    dropped = 0

    for photo in photos:
        coords = photo.coordinates
        if (
            not photo.id
            or coords is None
            or not _is_valid_coordinate(coords.latitude, 90.0)
            or not _is_valid_coordinate(coords.longitude, 180.0)
        ):
            dropped += 1
            continue

        items.append(
            GeolocatedItem(
                id=str(photo.id),
                latitude=float(coords.latitude),
                longitude=float(coords.longitude),
                payload={
                    "image_url": photo.image_url,
                    "description": photo.description,
                    "location": photo.location,
                    "year": photo.year,
                    "author": photo.author,
                    "address": coords.address,
                },
            )
        )

    if dropped:
        logger.debug(f"Dropped {dropped} photos without usable coordinates.")
    return items


def filter_by_decade(items: List[GeolocatedItem], decade: Union[str, int, None]) -> List[GeolocatedItem]:
    if decade is None or decade == "all":
        return items

    start = parse_year(decade)
    if start is None:
        return items

    filtered = []
    for item in items:
        year = parse_year(item.payload.get("year"))
        if year is not None and start <= year < start + 10:
            filtered.append(item)
    return filtered


def filter_by_location(items: List[GeolocatedItem], query: Optional[str]) -> List[GeolocatedItem]:
    if not query or not query.strip():
        return items

    needle = query.lower()
    return [
        item for item in items
        if needle in (item.payload.get("location") or "").lower()
        or needle in (item.payload.get("address") or "").lower()
    ]


def available_decades(items: Iterable[GeolocatedItem]) -> List[int]:
    decades = set()
    for item in items:
        year = parse_year(item.payload.get("year"))
        if year is not None:
            decades.add(year // 10 * 10)
    return sorted(decades)
