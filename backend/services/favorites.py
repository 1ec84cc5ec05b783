"""
Favorites store.

Keeps the user's bookmarked places in memory, in insertion order, and mirrors
the whole list to durable key-value storage after every change. Places are
matched by display name only, so two different places sharing a name count as
one favorite.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import List

from domain.models import Place
from services.observable import Observable
from storage.key_value import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_FAVORITES_KEY = "favorites"


def encode_places(places: List[Place]) -> bytes:
    return json.dumps([p.to_dict() for p in places], ensure_ascii=False).encode("utf-8")


def decode_places(data: bytes) -> List[Place]:
    """Decode a stored favorites list; raises ValueError on any malformed input."""
    payload = json.loads(data.decode("utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"favorites payload must be a list, got {type(payload).__name__}")
    return [Place.from_dict(item) for item in payload]


class FavoritesStore:
    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_FAVORITES_KEY):
        self.storage = storage
        self.key = key
        self.favorites: Observable[List[Place]] = Observable([])
        # Held across read-modify-persist-publish; reentrant so subscribers may read or mutate.
        self._lock = threading.RLock()
        self._places: List[Place] = self._load()
        self.favorites.set(list(self._places))

    def _load(self) -> List[Place]:
        try:
            data = self.storage.get(self.key)
        except Exception:
            logger.exception("Reading favorites under key %r failed; starting empty", self.key)
            return []
        if data is None:
            logger.info("No saved favorites under key %r", self.key)
            return []
        try:
            places = decode_places(data)
        except ValueError as exc:
            # UnicodeDecodeError and JSONDecodeError are ValueErrors too
            logger.error("Saved favorites could not be decoded (%s); starting empty", exc)
            return []
        logger.info("Loaded %d favorites", len(places))
        return places

    def _persist(self) -> None:
        try:
            self.storage.set(self.key, encode_places(self._places))
        except Exception:
            logger.exception("Saving %d favorites failed; storage is now stale", len(self._places))
            return
        logger.info("Saved %d favorites", len(self._places))

    def _publish(self) -> None:
        self.favorites.set(list(self._places))

    def contains(self, place: Place) -> bool:
        return any(p.same_place(place) for p in self._places)

    def all(self) -> List[Place]:
        return list(self._places)

    def add(self, place: Place) -> None:
        """Append place unless one with the same name is already saved."""
        with self._lock:
            if self.contains(place):
                return
            self._places.append(place)
            self._persist()
            self._publish()

    def remove(self, place: Place) -> None:
        """Drop every favorite sharing place's name; a miss is not an error."""
        with self._lock:
            self._places = [p for p in self._places if not p.same_place(place)]
            self._persist()
            self._publish()

    def toggle(self, place: Place) -> bool:
        """Flip the favorite state of place and return the new state."""
        with self._lock:
            if self.contains(place):
                self._places = [p for p in self._places if not p.same_place(place)]
                now_favorite = False
            else:
                self._places.append(place)
                now_favorite = True
            self._persist()
            self._publish()
        return now_favorite
