import pytest
import requests
from fastapi.testclient import TestClient

from bgrelay_service import config
from bgrelay_service.api import create_app
from bgrelay_service.upstream import RemoveBgClient

TEST_API_KEY = "test-key-123"
TEST_API_URL = "https://upstream.example/v1.0/removebg"


def make_response(status_code: int, content: bytes = b"", reason=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.reason = reason
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Stands in for `requests.Session`, recording every POST."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    # No stray .env or process env may leak into settings.
    monkeypatch.chdir(tmp_path)
    for name in ("REMOVE_BG_API_KEY", "REMOVE_BG_API_URL", "PORT", "HOST", "REQUEST_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def settings():
    return config.Settings(remove_bg_api_key=TEST_API_KEY, remove_bg_api_url=TEST_API_URL, _env_file=None)


@pytest.fixture
def session():
    return FakeSession(response=make_response(200, b"\x89PNG\r\n\x1a\nfake", reason="OK"))


@pytest.fixture
def client(settings, session):
    relay_client = RemoveBgClient.from_settings(settings, session=session)
    return TestClient(create_app(settings, relay_client))
