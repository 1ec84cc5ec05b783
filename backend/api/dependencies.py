"""
Process-wide collaborators for the API.

Built once at startup and stored on `app.state`; routes receive them through
FastAPI dependencies so tests can swap them with `app.dependency_overrides`.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from services.dispatch import ImmediateDispatcher
from services.favorites import FavoritesStore
from services.places_client import PlacesClient
from settings import Settings, settings as default_settings
from storage.key_value import KeyValueStore


@dataclass
class AppServices:
    places_client: PlacesClient
    favorites: FavoritesStore


def build_services(config: Optional[Settings] = None) -> AppServices:
    config = config or default_settings
    # Completions run on the request thread; routes hop back onto the event loop themselves.
    client = PlacesClient(
        api_key=config.KAKAO_REST_API_KEY,
        base_url=config.KAKAO_LOCAL_BASE_URL,
        dispatcher=ImmediateDispatcher(),
        timeout=config.PLACES_HTTP_TIMEOUT,
    )
    storage = KeyValueStore(db_path=config.PLACE_EXPLORER_DB_PATH)
    favorites = FavoritesStore(storage, key=config.FAVORITES_STORAGE_KEY)
    return AppServices(places_client=client, favorites=favorites)


def get_places_client(request: Request) -> PlacesClient:
    return request.app.state.services.places_client


def get_favorites_store(request: Request) -> FavoritesStore:
    return request.app.state.services.favorites
