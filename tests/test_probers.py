import httpx
import pytest

from twa.checkers.reachability import Reachability
from twa.checkers.repository import REPO_FILES, ExposedRepository
from twa.checkers.robots import Robots
from twa.core.models import Severity


def test_open_port_is_silent(client, state):
    assert Reachability(client).execute(state) == []
    assert state.no_https is False


def test_closed_port_is_fatal_and_flags_state(site, client, state):
    site.open_ports = set()
    findings = Reachability(client).execute(state)
    assert [f.severity for f in findings] == [Severity.FATAL]
    assert findings[0].message == "expected port 443 to be open, but it isn't"
    assert state.no_https is True


@pytest.mark.parametrize("code,expected", [
    (200, Severity.FAIL),
    (403, Severity.MEH),
    (404, Severity.PASS),
    (500, Severity.UNK),
])
def test_repository_codes(site, client, state, code, expected):
    for repo_file in REPO_FILES:
        site.on(f"http://example.com/{repo_file}", code)
    findings = ExposedRepository(client).execute(state)
    assert [f.severity for f in findings] == [expected] * len(REPO_FILES)


def test_repository_probe_uses_get_and_follows_redirects(site, client, state):
    site.on("http://example.com/.git/HEAD", 301, {"Location": "https://example.com/.git/HEAD"})
    site.on("https://example.com/.git/HEAD", 200)
    findings = ExposedRepository(client).execute(state)
    assert findings[0].severity is Severity.FAIL
    assert "http://example.com/.git/HEAD" in findings[0].message
    assert all(method == "GET" for method, _ in site.requests)


def test_one_failed_probe_does_not_stop_the_others(site, client, state):
    site.fails("http://example.com/.hg/store/00manifest.i", httpx.ReadTimeout, "slow")
    findings = ExposedRepository(client).execute(state)
    assert [f.severity for f in findings] == [Severity.PASS, Severity.UNK, Severity.PASS]


@pytest.mark.parametrize("code,expected", [
    (200, Severity.PASS),
    (404, Severity.MEH),
    (410, Severity.UNK),
])
def test_robots(site, client, state, code, expected):
    site.on("http://example.com/robots.txt", code)
    findings = Robots(client).execute(state)
    assert [f.severity for f in findings] == [expected]


def test_robots_fetch_error_is_unk(site, client, state):
    site.fails("http://example.com/robots.txt")
    findings = Robots(client).execute(state)
    assert [f.severity for f in findings] == [Severity.UNK]
