import httpx
import pytest

from twa.core.client import HttpClient
from twa.core.config import Config
from twa.core.models import PipelineState


class FakeSite:
    """Canned responses keyed by (scheme, host, path); unknown paths 404."""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.open_ports = {443}

    @staticmethod
    def _key(url):
        u = httpx.URL(url)
        return (u.scheme, u.host, u.path or "/")

    def on(self, url, status=200, headers=None):
        self.routes[self._key(url)] = (status, headers or {})
        return self

    def fails(self, url, exc_cls=httpx.ConnectError, msg="connection refused"):
        self.routes[self._key(url)] = (exc_cls, msg)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, str(request.url)))
        route = self.routes.get(self._key(str(request.url)))
        if route is None:
            return httpx.Response(404)
        first, second = route
        if isinstance(first, type) and issubclass(first, Exception):
            raise first(second, request=request)
        return httpx.Response(first, headers=second)

    def connector(self, host, port, timeout):
        return port in self.open_ports


@pytest.fixture
def site():
    return FakeSite()


@pytest.fixture
def client(site):
    c = HttpClient(Config(), transport=httpx.MockTransport(site.handler),
                   connector=site.connector)
    yield c
    c.close()


@pytest.fixture
def state():
    return PipelineState(domain="example.com")


@pytest.fixture
def good_headers():
    return [
        ("Strict-Transport-Security", "max-age=31536000; includeSubDomains; preload"),
        ("X-Frame-Options", "DENY"),
        ("X-Content-Type-Options", "nosniff"),
        ("X-XSS-Protection", "1; mode=block"),
        ("Referrer-Policy", "no-referrer"),
        ("Content-Security-Policy", "default-src 'none'"),
        ("Feature-Policy", "camera 'none'"),
    ]
