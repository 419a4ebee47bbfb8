import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from floorgen import create_app  # noqa: E402
from floorgen.routes.floor_api import clear_floor_cache  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "FLOORGEN_DISABLE_CACHE": False})
    clear_floor_cache()
    yield app
    clear_floor_cache()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clean_floorgen_env(monkeypatch):
    # FLOORGEN_* variables from a developer shell or .env would change
    # FloorConfig.from_env() results mid-suite.
    for key in list(os.environ):
        if key.startswith("FLOORGEN_") and key not in ("FLOORGEN_LOG_LEVEL", "FLOORGEN_LOG_JSON"):
            monkeypatch.delenv(key, raising=False)
