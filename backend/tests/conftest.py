import sys
from pathlib import Path

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from unittest.mock import MagicMock

import pytest

from storage.key_value import KeyValueStore


SAMPLE_RESPONSE = {
    "documents": [
        {
            "place_name": "Test Cafe",
            "road_address_name": "Seoul",
            "distance": "120",
            "x": "126.978",
            "y": "37.5665",
            "phone": None,
            "place_url": "https://example.com/1",
        }
    ]
}


def make_response(status_code=200, json_data=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def kv_store(tmp_path):
    return KeyValueStore(db_path=str(tmp_path / "place_explorer.sqlite"))


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.get.return_value = make_response(200, SAMPLE_RESPONSE)
    return session
