import socket
import time
from typing import Callable, Optional
from urllib.parse import urljoin

import httpx

from twa.core.config import Config
from twa.core.errors import FetchError, FetchTimeout
from twa.core.models import HttpResponse
from twa.parsers.headers import HeaderSet

Connector = Callable[[str, int, float], bool]

MAX_REDIRECTS = 5
REDIRECT_CODES = {301, 302, 303, 307, 308}


def tcp_connect(host: str, port: int, timeout: float) -> bool:
    """True when a TCP connection to host:port opens within *timeout*."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except (OSError, UnicodeError):
        return False


class HttpClient:
    """Thin httpx wrapper: one bounded attempt per fetch, bodies never read."""

    def __init__(self, config: Optional[Config] = None,
                 transport: httpx.BaseTransport | None = None,
                 connector: Connector | None = None, logger=None):
        self.config = config or Config()
        self.logger = logger
        self.connector = connector or tcp_connect
        self.client = httpx.Client(
            verify=self.config.verify,
            proxy=self.config.proxy,
            transport=transport,
            follow_redirects=False,
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
        )

    def fetch(self, url: str, method: str = "HEAD", follow_redirects: bool = False,
              timeout: float | None = None) -> HttpResponse:
        timeout = self.config.timeout if timeout is None else timeout
        if self.logger:
            self.logger.debug(f"→ {method} {url}")
        try:
            with self.client.stream(method, url, follow_redirects=follow_redirects,
                                    timeout=timeout) as resp:
                result = HttpResponse(
                    url=str(resp.url),
                    status_code=resp.status_code,
                    headers=HeaderSet.from_httpx(resp.headers),
                )
        except httpx.TimeoutException as e:
            raise FetchTimeout(url, f"timed out after {timeout:g}s") from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e
        except httpx.InvalidURL as e:
            raise FetchError(url, f"invalid URL ({e})") from e

        if self.logger:
            self.logger.debug(f"← {result.status_code} {result.url}")
        return result

    def status(self, url: str) -> int:
        """
        Final status code of a GET that follows redirects. The whole chain
        shares one deadline of config.timeout seconds.
        """
        deadline = time.monotonic() + self.config.timeout
        current = url
        for _ in range(MAX_REDIRECTS + 1):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise FetchTimeout(url, f"timed out after {self.config.timeout:g}s")
            resp = self.fetch(current, method="GET", timeout=remaining)
            location = resp.headers.get("Location")
            if resp.status_code not in REDIRECT_CODES or not location:
                return resp.status_code
            current = urljoin(resp.url, location)
        raise FetchError(url, f"more than {MAX_REDIRECTS} redirects")

    def probe(self, host: str, port: int) -> bool:
        if self.logger:
            self.logger.debug(f"→ TCP {host}:{port}")
        return self.connector(host, port, self.config.probe_timeout)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
