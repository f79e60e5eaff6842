import httpx
import pytest

from twa.checkers.redirect import Redirect, classify_redirect
from twa.core.models import Severity


@pytest.mark.parametrize("status,location,expected", [
    (301, "https://example.com/", Severity.PASS),
    (302, "https://example.com/", Severity.MEH),
    (307, "https://example.com/", Severity.UNK),
    (308, "HTTPS://example.com/", Severity.UNK),
    (200, "https://example.com/", Severity.UNK),
    (301, "http://www.example.com/", Severity.FAIL),
    (302, "http://example.com/", Severity.FAIL),
    (301, None, Severity.FAIL),
    (200, None, Severity.FAIL),
])
def test_classify_redirect(status, location, expected):
    severity, _ = classify_redirect(status, location)
    assert severity is expected


def test_unknown_code_is_reported():
    _, message = classify_redirect(307, "https://example.com")
    assert "307" in message


def test_301_to_https_is_one_pass(site, client, state):
    site.on("http://example.com/", 301, {"Location": "https://example.com"})
    findings = Redirect(client).execute(state)
    assert [f.severity for f in findings] == [Severity.PASS]
    assert findings[0].domain == "example.com"
    assert [m for m, _ in site.requests] == ["HEAD"]


def test_no_redirect_fails(site, client, state):
    site.on("http://example.com/", 200, {"Server": "nginx"})
    findings = Redirect(client).execute(state)
    assert [f.severity for f in findings] == [Severity.FAIL]
    assert "doesn't redirect" in findings[0].message
    assert state.headers.get("Server") == "nginx"


def test_relative_location_stays_on_http(site, client, state):
    site.on("http://example.com/", 301, {"Location": "/home"})
    findings = Redirect(client).execute(state)
    assert [f.severity for f in findings] == [Severity.FAIL]
    assert "HTTP (not secure)" in findings[0].message


def test_fetch_error_is_unk(site, client, state):
    site.fails("http://example.com/", httpx.ConnectTimeout, "timed out")
    findings = Redirect(client).execute(state)
    assert [f.severity for f in findings] == [Severity.UNK]
    assert state.headers is None
