from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from typer.testing import CliRunner

from love.client import Client
from love.core.config import ClientSettings

SITE = "mysupport"
API_KEY = "secret-key"


class FakeTenderAPI:
    """In-memory stand-in for api.tenderapp.com, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def add(self, path: str, payload: Any = None, status_code: int = 200, content: Optional[bytes] = None) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=payload)

        self._routes[path] = respond

    def add_collection(
        self,
        path: str,
        list_key: str,
        records: List[Dict[str, Any]],
        per_page: int = 10,
        total: Optional[int] = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params.get("page", "1"))
            chunk = records[(page - 1) * per_page : page * per_page]
            body = {
                "offset": (page - 1) * per_page,
                "total": len(records) if total is None else total,
                "per_page": per_page,
                list_key: chunk,
            }
            return httpx.Response(200, json=body)

        self._routes[path] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, content=b"Not Found")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def pages_requested(self) -> List[int]:
        return [int(r.url.params.get("page", "1")) for r in self.requests]


def _make_records(count: int, prefix: str = "Record") -> List[Dict[str, Any]]:
    return [
        {"id": i, "title": f"{prefix} {i}", "href": f"https://api.tenderapp.com/{SITE}/discussions/{i}"}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_records():
    return _make_records


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keep TENDER_* variables and user .env files out of the tests."""
    for name in ("TENDER_SITE", "TENDER_API_KEY", "TENDER_API_HOST", "TENDER_PERSISTENT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(_env_file=None, site=SITE, api_key=API_KEY)


@pytest.fixture
def fake_api() -> FakeTenderAPI:
    return FakeTenderAPI()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def make_client(settings, fake_api, sleeps):
    """Factory for clients wired to the fake API and a recording sleep."""

    def factory(**options: Any) -> Client:
        options.setdefault("settings", settings)
        options.setdefault("http_transport", fake_api.transport)
        options.setdefault("sleep", sleeps.append)
        return Client(SITE, API_KEY, **options)

    return factory


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()
