"""
Places API routes.

Nearby search by category or keyword around a coordinate.
"""
import asyncio
import logging
from typing import Callable, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from api.dependencies import get_places_client
from domain.models import DEFAULT_CATEGORY, Category, Coordinate, Place
from services.dispatch import EventLoopDispatcher
from services.places_client import Completion, PlacesClient

router = APIRouter()
logger = logging.getLogger(__name__)


class PlaceResponse(BaseModel):
    id: str
    place_name: str
    road_address_name: str
    distance: str
    x: str
    y: str
    phone: Optional[str] = None
    place_url: Optional[str] = None
    directions_url: Optional[str] = None


class CategoryResponse(BaseModel):
    code: str
    label: str


def place_to_response(place: Place) -> PlaceResponse:
    return PlaceResponse(id=place.id, directions_url=place.directions_url(), **place.to_dict())


async def _await_places(start: Callable[[Completion], object]) -> List[Place]:
    """Run a callback-style lookup and wait for its single completion on this loop."""
    loop = asyncio.get_running_loop()
    done: asyncio.Future = loop.create_future()
    dispatcher = EventLoopDispatcher(loop)

    def completion(places: List[Place]) -> None:
        dispatcher.post(_resolve, done, places)

    start(completion)
    return await done


def _resolve(future: asyncio.Future, places: List[Place]) -> None:
    if not future.done():
        future.set_result(places)


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories():
    return [CategoryResponse(code=c.value, label=c.label) for c in Category]


@router.get("/nearby", response_model=List[PlaceResponse])
async def nearby_places(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    category: Category = DEFAULT_CATEGORY,
    client: PlacesClient = Depends(get_places_client),
):
    origin = Coordinate(latitude=lat, longitude=lon)
    places = await _await_places(
        lambda completion: client.fetch_by_category(category, origin, completion)
    )
    return [place_to_response(p) for p in places]


@router.get("/search", response_model=List[PlaceResponse])
async def search_places(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    keyword: str = "",
    category: Optional[str] = None,
    client: PlacesClient = Depends(get_places_client),
):
    """Keyword search; blank keywords fall back to the category search."""
    origin = Coordinate(latitude=lat, longitude=lon)
    trimmed = keyword.strip()
    if not trimmed:
        # category is only consulted on the fallback path
        try:
            fallback = Category.parse(category) if category else DEFAULT_CATEGORY
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Unsupported category code: {category}")
        logger.debug("Blank keyword; falling back to category %s", fallback.value)
        places = await _await_places(
            lambda completion: client.fetch_by_category(fallback, origin, completion)
        )
    else:
        places = await _await_places(
            lambda completion: client.search_by_keyword(trimmed, origin, completion)
        )
    return [place_to_response(p) for p in places]
