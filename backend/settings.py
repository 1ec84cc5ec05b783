import os
from pathlib import Path

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent
DEFAULT_DB_PATH = BACKEND_ROOT / "data" / "place_explorer.sqlite"
KAKAO_LOCAL_BASE_URL = "https://dapi.kakao.com/v2/local/search"


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.KAKAO_REST_API_KEY: str = os.getenv("KAKAO_REST_API_KEY", "")
        self.KAKAO_LOCAL_BASE_URL: str = os.getenv("KAKAO_LOCAL_BASE_URL", KAKAO_LOCAL_BASE_URL)
        self.PLACES_HTTP_TIMEOUT: float = _as_float(os.getenv("PLACES_HTTP_TIMEOUT"), 10.0)
        self.PLACE_EXPLORER_DB_PATH: str = os.getenv("PLACE_EXPLORER_DB_PATH", str(DEFAULT_DB_PATH))
        self.FAVORITES_STORAGE_KEY: str = os.getenv("FAVORITES_STORAGE_KEY", "favorites")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
