"""Search places around a coordinate from the command line.

Usage (from backend/):
    python -m scripts.explore_nearby --lat 37.5665 --lon 126.9780 --category CE7
    python -m scripts.explore_nearby --lat 37.5665 --lon 126.9780 --keyword "국밥"
    python -m scripts.explore_nearby --list-favorites

Results are delivered through a QueueDispatcher pumped on the main thread, so
the favorites store is only ever touched from here. A blank --keyword falls
back to the category search.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from domain.models import DEFAULT_CATEGORY, Category, Coordinate, DEFAULT_CENTER, MapRegion, Place
from services.dispatch import QueueDispatcher
from services.explorer import PlaceExplorer
from services.favorites import FavoritesStore
from services.places_client import PlacesClient
from settings import settings
from storage.key_value import KeyValueStore

LOG = logging.getLogger("explore_nearby")


def format_places(places: List[Place]) -> str:
    if not places:
        return "(no places)"
    lines = []
    for i, p in enumerate(places, start=1):
        line = f"{i:>2}. {p.place_name}  {p.distance}m  {p.road_address_name}"
        if p.phone:
            line += f"  tel {p.phone}"
        lines.append(line)
    return "\n".join(lines)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Nearby place search via Kakao Local")
    parser.add_argument("--lat", type=float, default=DEFAULT_CENTER.latitude)
    parser.add_argument("--lon", type=float, default=DEFAULT_CENTER.longitude)
    parser.add_argument(
        "--category",
        default=DEFAULT_CATEGORY.value,
        choices=[c.value for c in Category],
        help="category group code (FD6 food, CE7 cafe, AT4 attraction)",
    )
    parser.add_argument("--keyword", default=None, help="free-text search; blank falls back to --category")
    parser.add_argument("--add-favorites", action="store_true", help="bookmark every result")
    parser.add_argument("--list-favorites", action="store_true", help="print saved favorites and exit")
    parser.add_argument("--timeout", type=float, default=settings.PLACES_HTTP_TIMEOUT + 5.0)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    favorites = FavoritesStore(
        KeyValueStore(db_path=settings.PLACE_EXPLORER_DB_PATH),
        key=settings.FAVORITES_STORAGE_KEY,
    )
    if args.list_favorites:
        print(format_places(favorites.all()))
        return 0

    dispatcher = QueueDispatcher()
    client = PlacesClient(
        api_key=settings.KAKAO_REST_API_KEY,
        base_url=settings.KAKAO_LOCAL_BASE_URL,
        dispatcher=dispatcher,
        timeout=settings.PLACES_HTTP_TIMEOUT,
    )
    origin = Coordinate(latitude=args.lat, longitude=args.lon)
    explorer = PlaceExplorer(client, favorites, region=MapRegion(center=origin))
    explorer.selected_category = Category.parse(args.category)

    received: List[List[Place]] = []
    explorer.places.subscribe(received.append)
    if args.keyword is not None:
        explorer.search(args.keyword)
    else:
        explorer.refresh_nearby()

    if not dispatcher.run_until(lambda: bool(received), timeout=args.timeout):
        LOG.error("No response within %.1fs", args.timeout)
        return 1

    places = received[-1]
    print(format_places(places))
    if args.add_favorites:
        for place in places:
            explorer.favorites.add(place)
        print(f"favorites: {len(favorites.all())}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
