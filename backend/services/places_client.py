"""
Kakao Local nearby-search client.

Both lookups share one policy: a 1000 m radius around the origin, results
sorted by distance. Each call runs one GET on its own background thread and
reports exactly once through the configured dispatcher. Failures of any kind
are logged and reported as an empty list.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

import requests

from domain.models import (
    SEARCH_RADIUS_M,
    SEARCH_SORT,
    Category,
    Coordinate,
    Place,
    PlaceResult,
)
from services.dispatch import Dispatcher, ImmediateDispatcher
from settings import KAKAO_LOCAL_BASE_URL

logger = logging.getLogger(__name__)

CATEGORY_ENDPOINT = "category.json"
KEYWORD_ENDPOINT = "keyword.json"

Completion = Callable[[List[Place]], None]


class PlacesClient:
    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        dispatcher: Optional[Dispatcher] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or KAKAO_LOCAL_BASE_URL).rstrip("/")
        self.dispatcher = dispatcher or ImmediateDispatcher()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"KakaoAK {api_key}"}
        if not api_key:
            logger.warning("Kakao REST API key is empty; searches will be rejected upstream")

    def _origin_params(self, origin: Coordinate) -> Dict[str, str]:
        return {
            "x": str(origin.longitude),
            "y": str(origin.latitude),
            "radius": str(SEARCH_RADIUS_M),
            "sort": SEARCH_SORT,
        }

    def fetch_by_category(
        self,
        category_code: Category | str,
        origin: Coordinate,
        completion: Completion,
    ) -> Optional[threading.Thread]:
        """Nearby search filtered by a category group code."""
        try:
            category = Category.parse(category_code)
        except ValueError:
            logger.warning("Unsupported category code %r; delivering no places", category_code)
            self.dispatcher.post(completion, [])
            return None
        params = {"category_group_code": category.value, **self._origin_params(origin)}
        return self._start(CATEGORY_ENDPOINT, params, completion)

    def search_by_keyword(
        self,
        keyword: str,
        origin: Coordinate,
        completion: Completion,
    ) -> Optional[threading.Thread]:
        """
        Nearby search filtered by free text.

        Callers are expected to switch to fetch_by_category for blank input; a
        blank keyword here is treated as a failed request.
        """
        trimmed = (keyword or "").strip()
        if not trimmed:
            logger.warning("Empty keyword; delivering no places")
            self.dispatcher.post(completion, [])
            return None
        params = {"query": trimmed, **self._origin_params(origin)}
        return self._start(KEYWORD_ENDPOINT, params, completion)

    def _start(self, endpoint: str, params: Dict[str, str], completion: Completion) -> threading.Thread:
        def run() -> None:
            try:
                places = self.fetch_places(endpoint, params)
            except Exception:
                logger.exception("Places lookup on %s failed unexpectedly", endpoint)
                places = []
            self.dispatcher.post(completion, places)

        worker = threading.Thread(target=run, name=f"places-{endpoint}", daemon=True)
        worker.start()
        return worker

    def fetch_places(self, endpoint: str, params: Dict[str, Any]) -> List[Place]:
        """Blocking request/decode; returns [] on any failure."""
        url = f"{self.base_url}/{endpoint}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Places request to %s failed: %s", url, exc)
            return []

        if not 200 <= resp.status_code < 300:
            logger.warning("Places request to %s returned HTTP %s", url, resp.status_code)
            return []

        try:
            # pydantic's ValidationError and requests' JSONDecodeError are both ValueErrors
            result = PlaceResult.model_validate(resp.json())
        except ValueError as exc:
            logger.warning("Places response from %s could not be decoded: %s", url, exc)
            return []

        places = result.to_places()
        logger.info("Received %d places from %s", len(places), endpoint)
        return places
