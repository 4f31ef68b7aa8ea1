from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Coordinates:
    latitude: Optional[Any] = None
    longitude: Optional[Any] = None
    address: Optional[str] = None


@dataclass
class Photo:
    id: Optional[str] = None
    image_url: str = ""
    description: str = ""
    location: str = ""
    year: str = ""  # free text, e.g. "1965" or "oko 1930."
    author: str = ""
    detailed_description: Optional[str] = None
    coordinates: Optional[Coordinates] = None
