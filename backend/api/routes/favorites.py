"""
Favorites API routes.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_favorites_store
from api.routes.places import PlaceResponse, place_to_response
from domain.models import Place
from services.favorites import FavoritesStore

router = APIRouter()


class PlaceIn(BaseModel):
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


class FavoriteStatusResponse(BaseModel):
    place_name: str
    is_favorite: bool


def _named(place_name: str) -> Place:
    # Favorites match on name alone, so the other fields are irrelevant for lookups.
    return Place(place_name=place_name, road_address_name="", distance="", x="", y="")


@router.get("", response_model=List[PlaceResponse])
def list_favorites(store: FavoritesStore = Depends(get_favorites_store)):
    return [place_to_response(p) for p in store.all()]


@router.post("", response_model=List[PlaceResponse])
def add_favorite(payload: PlaceIn, store: FavoritesStore = Depends(get_favorites_store)):
    """Bookmark a place; re-adding an existing name leaves the list unchanged."""
    store.add(payload.to_place())
    return [place_to_response(p) for p in store.all()]


@router.post("/toggle", response_model=FavoriteStatusResponse)
def toggle_favorite(payload: PlaceIn, store: FavoritesStore = Depends(get_favorites_store)):
    is_favorite = store.toggle(payload.to_place())
    return FavoriteStatusResponse(place_name=payload.place_name, is_favorite=is_favorite)


@router.get("/{place_name:path}", response_model=FavoriteStatusResponse)
def favorite_status(place_name: str, store: FavoritesStore = Depends(get_favorites_store)):
    return FavoriteStatusResponse(place_name=place_name, is_favorite=store.contains(_named(place_name)))


@router.delete("/{place_name:path}", response_model=List[PlaceResponse])
def remove_favorite(place_name: str, store: FavoritesStore = Depends(get_favorites_store)):
    """Remove every favorite with this name; unknown names are not an error."""
    store.remove(_named(place_name))
    return [place_to_response(p) for p in store.all()]
