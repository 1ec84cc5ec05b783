"""
Core domain models for the place explorer.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional
import math
import uuid
from urllib.parse import quote

from pydantic import BaseModel


SEARCH_RADIUS_M = 1000
SEARCH_SORT = "distance"
KAKAO_MAP_DIRECTIONS_URL = "https://map.kakao.com/link/to/{name},{lat},{lon}"


class Category(str, Enum):
    """Kakao category group codes offered by the category picker."""
    FOOD = "FD6"
    CAFE = "CE7"
    ATTRACTION = "AT4"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Accept a member or its code string; raise ValueError otherwise."""
        if isinstance(value, Category):
            return value
        return cls(str(value).strip().upper())


_CATEGORY_LABELS = {
    Category.FOOD: "맛집",
    Category.CAFE: "카페",
    Category.ATTRACTION: "관광지",
}

DEFAULT_CATEGORY = Category.FOOD


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair in decimal degrees."""
    latitude: float
    longitude: float


# Seoul City Hall, used before the first location fix arrives.
DEFAULT_CENTER = Coordinate(latitude=37.5665, longitude=126.9780)


@dataclass(frozen=True)
class MapRegion:
    """Visible map window: a center plus latitude/longitude spans."""
    center: Coordinate = DEFAULT_CENTER
    latitude_delta: float = 0.01
    longitude_delta: float = 0.01

    def zoomed_in(self) -> "MapRegion":
        return replace(
            self,
            latitude_delta=self.latitude_delta * 0.5,
            longitude_delta=self.longitude_delta * 0.5,
        )

    def zoomed_out(self) -> "MapRegion":
        return replace(
            self,
            latitude_delta=self.latitude_delta * 2.0,
            longitude_delta=self.longitude_delta * 2.0,
        )

    def recentered(self, center: Coordinate) -> "MapRegion":
        return replace(self, center=center)


_REQUIRED_PLACE_FIELDS = ("place_name", "road_address_name", "distance", "x", "y")
_OPTIONAL_PLACE_FIELDS = ("phone", "place_url")


def _to_degrees(value: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _parse_degrees(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Place:
    """
    A point of interest returned by a nearby search.

    `id` is generated locally for list diffing and is neither sent by the API
    nor persisted. Two places are the same place when their display names
    match; coordinates are not compared.
    """
    place_name: str
    road_address_name: str
    distance: str  # meters from the query origin
    x: str  # longitude
    y: str  # latitude
    phone: Optional[str] = None
    place_url: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    def same_place(self, other: "Place") -> bool:
        return self.place_name == other.place_name

    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=_to_degrees(self.y), longitude=_to_degrees(self.x))

    def detail_url(self) -> Optional[str]:
        """URL of the vendor detail page, handed over unchanged."""
        return self.place_url or None

    def directions_url(self) -> Optional[str]:
        """Kakao Map route link to this place, or None when x/y are not numbers."""
        lat = _parse_degrees(self.y)
        lon = _parse_degrees(self.x)
        if lat is None or lon is None or not (math.isfinite(lat) and math.isfinite(lon)):
            return None
        return KAKAO_MAP_DIRECTIONS_URL.format(name=quote(self.place_name, safe=""), lat=lat, lon=lon)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "place_name": self.place_name,
            "road_address_name": self.road_address_name,
            "distance": self.distance,
            "x": self.x,
            "y": self.y,
            "phone": self.phone,
            "place_url": self.place_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Place":
        if not isinstance(data, dict):
            raise ValueError(f"place entry must be an object, got {type(data).__name__}")
        for key in _REQUIRED_PLACE_FIELDS:
            if not isinstance(data.get(key), str):
                raise ValueError(f"place entry field {key!r} is missing or not a string")
        for key in _OPTIONAL_PLACE_FIELDS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"place entry field {key!r} is not a string")
        return cls(
            place_name=data["place_name"],
            road_address_name=data["road_address_name"],
            distance=data["distance"],
            x=data["x"],
            y=data["y"],
            phone=data.get("phone"),
            place_url=data.get("place_url"),
        )


class PlaceDocument(BaseModel):
    """One entry of the `documents` array in a Kakao Local search response."""
    place_name: str
    road_address_name: str
    distance: str
    x: str
    y: str
    phone: Optional[str] = None
    place_url: Optional[str] = None

    def to_place(self) -> Place:
        return Place(
            place_name=self.place_name,
            road_address_name=self.road_address_name,
            distance=self.distance,
            x=self.x,
            y=self.y,
            phone=self.phone,
            place_url=self.place_url,
        )


class PlaceResult(BaseModel):
    """Response envelope; discarded right after unwrapping."""
    documents: List[PlaceDocument]

    def to_places(self) -> List[Place]:
        return [doc.to_place() for doc in self.documents]
