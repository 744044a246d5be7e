import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    os.environ["ENV"] = "test"
    os.environ["API_AUTH_ENABLED"] = "false"
    os.environ["OBSERVABILITY_ENABLED"] = "false"
    os.environ["BLOCK_PRIVATE_HOSTS"] = "false"
    os.environ["ALLOWED_FETCH_HOSTS"] = ""
    os.environ["FEEDS_SOURCE"] = "file"
    os.environ["FEEDS_CONFIG_PATH"] = str(FIXTURES / "feeds.yaml")
    os.environ["FETCH_STRATEGY"] = "file"
    os.environ["STATIC_FEEDS_DIR"] = str(FIXTURES / "mirror")
    os.environ["REVALIDATE_SECONDS"] = "900"

    from feedboard.core.config import get_settings

    get_settings.cache_clear()
    yield


@pytest.fixture(autouse=True)
def fresh_settings():
    from feedboard.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def client(setup_test_env):
    from feedboard.main import app

    with TestClient(app) as test_client:
        yield test_client
