"""Stage 1: HTTP should be redirected to HTTPS; no exceptions."""

from typing import List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from twa.checkers.base import BaseStage
from twa.core.models import Finding, PipelineState, Severity


def classify_redirect(status_code: int, location: Optional[str]) -> Tuple[Severity, str]:
    """
    Pure classification of a plain-HTTP response.

    *location* must already be absolute; None means no Location header.
    """
    if not location:
        return Severity.FAIL, "HTTP doesn't redirect at all"

    scheme = urlsplit(location).scheme.lower()
    if scheme == "https":
        if status_code == 301:
            return Severity.PASS, "HTTP redirects to HTTPS using a 301"
        if status_code == 302:
            return Severity.MEH, "HTTP redirects to HTTPS using a 302"
        return (Severity.UNK,
                f"HTTP sends an HTTPS location but with a weird response code: {status_code}")
    return Severity.FAIL, "HTTP redirects to HTTP (not secure)"


class Redirect(BaseStage):

    name = "Stage 1: HTTP -> HTTPS redirection"

    def run(self, state: PipelineState) -> List[Finding]:
        url = f"http://{state.domain}"
        resp = self.client.fetch(url, method="HEAD", follow_redirects=False)
        state.headers = resp.headers

        location = resp.headers.get("Location")
        if location:
            # relative redirects stay on the scheme we asked with
            location = urljoin(url + "/", location)
        severity, message = classify_redirect(resp.status_code, location)
        return [self.finding(state, severity, message)]
