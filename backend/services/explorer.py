"""
Explorer session state: what the map screen shows and how user actions turn
into searches.

This holds the caller-side policy around PlacesClient: blank search text falls
back to the category search, the first location fix recenters the map and
loads nearby places, and the visible list can be narrowed by name. Results are
applied in arrival order; a late response for an older query replaces newer
results.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from domain.models import DEFAULT_CATEGORY, Category, Coordinate, MapRegion, Place
from services.favorites import FavoritesStore
from services.observable import Observable
from services.places_client import PlacesClient

logger = logging.getLogger(__name__)


class PlaceExplorer:
    def __init__(
        self,
        client: PlacesClient,
        favorites: FavoritesStore,
        region: Optional[MapRegion] = None,
    ):
        self.client = client
        self.favorites = favorites
        self.places: Observable[List[Place]] = Observable([])
        self.region: Observable[MapRegion] = Observable(region or MapRegion())
        self.user_location: Observable[Optional[Coordinate]] = Observable(None)
        self.selected_category: Category = DEFAULT_CATEGORY
        self.search_text: str = ""
        self.showing_favorites: bool = False

    def _apply_results(self, results: List[Place]) -> None:
        self.places.set(results)

    def refresh_nearby(self) -> None:
        self.client.fetch_by_category(
            self.selected_category, self.region.value.center, self._apply_results
        )

    def select_category(self, category: Category | str) -> None:
        self.selected_category = Category.parse(category)
        self.refresh_nearby()

    def search(self, text: Optional[str] = None) -> None:
        """Keyword search around the map center; blank text reloads the category instead."""
        if text is not None:
            self.search_text = text
        keyword = self.search_text.strip()
        if not keyword:
            self.refresh_nearby()
            return
        self.client.search_by_keyword(keyword, self.region.value.center, self._apply_results)

    def filtered_places(self) -> List[Place]:
        source = self.favorites.all() if self.showing_favorites else list(self.places.value)
        needle = self.search_text.strip().casefold()
        if not needle:
            return source
        return [p for p in source if needle in p.place_name.casefold()]

    def toggle_favorites_view(self) -> bool:
        self.showing_favorites = not self.showing_favorites
        return self.showing_favorites

    def toggle_favorite(self, place: Place) -> bool:
        return self.favorites.toggle(place)

    def update_user_location(self, coordinate: Coordinate) -> None:
        first_fix = self.user_location.value is None
        self.user_location.set(coordinate)
        if first_fix:
            logger.info("First location fix at %.6f, %.6f", coordinate.latitude, coordinate.longitude)
            self.region.set(self.region.value.recentered(coordinate))
            self.refresh_nearby()

    def center_on_user(self) -> None:
        current = self.user_location.value
        if current is not None:
            self.region.set(self.region.value.recentered(current))

    def zoom_in(self) -> None:
        self.region.set(self.region.value.zoomed_in())

    def zoom_out(self) -> None:
        self.region.set(self.region.value.zoomed_out())

    def detail_url(self, place: Place) -> Optional[str]:
        return place.detail_url()

    def directions_url(self, place: Place) -> Optional[str]:
        return place.directions_url()
