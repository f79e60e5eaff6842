"""Stage 2: the server should specify a decent set of security headers.

Checks, each independent of the others:
  * Strict-Transport-Security should have a long max-age, includeSubDomains, preload
  * X-Frame-Options should be "deny"
  * X-Content-Type-Options should be "nosniff"
  * X-XSS-Protection should be "1; mode=block"
  * Referrer-Policy should be "no-referrer"
  * Content-Security-Policy should have default-src 'none' and nothing unsafe
  * Feature-Policy should be present
"""

from typing import List, Optional

from twa.checkers.base import BaseStage
from twa.core.models import Finding, PipelineState
from twa.parsers.headers import DirectiveList, HeaderSet, get_field, get_header

HSTS_MIN_MAX_AGE = 15768000  # ~6 months

_WEAK_REFERRER_POLICIES = {
    "unsafe-url",
    "no-referrer-when-downgrade",
    "origin",
    "origin-when-cross-origin",
    "same-origin",
    "strict-origin",
}

# header -> method; evaluated in this order, never short-circuited
_CHECKS = (
    ("Strict-Transport-Security", "_hsts"),
    ("X-Frame-Options", "_frame_options"),
    ("X-Content-Type-Options", "_content_type_options"),
    ("X-XSS-Protection", "_xss_protection"),
    ("Referrer-Policy", "_referrer_policy"),
    ("Content-Security-Policy", "_csp"),
    ("Feature-Policy", "_feature_policy"),
)


class SecurityHeaders(BaseStage):

    name = "Stage 2: Security headers"

    def run(self, state: PipelineState) -> List[Finding]:
        if state.no_https:
            return [self.fatal(state, "skipping security header checks due to no secure channel")]

        resp = self.client.fetch(f"https://{state.domain}", method="HEAD")
        state.headers = resp.headers
        return self.audit(state, resp.headers)

    def audit(self, state: PipelineState, headers: HeaderSet) -> List[Finding]:
        findings: List[Finding] = []
        for header, check in _CHECKS:
            findings.extend(getattr(self, check)(state, get_header(header, headers)))
        return findings

    # ── individual headers ──────────────────────────────────────

    def _hsts(self, state, sts: Optional[str]) -> List[Finding]:
        if sts is None:
            return [self.fail(state, "Strict-Transport-Security missing")]

        out = []
        max_age = get_field("max-age", sts)
        if max_age is None:
            out.append(self.unk(state, f"Strict-Transport-Security has no max-age: {sts}"))
        else:
            try:
                seconds = int(max_age.strip('"'))
            except ValueError:
                out.append(self.unk(
                    state, f"Strict-Transport-Security max-age is unreadable: {max_age}"))
            else:
                if seconds >= HSTS_MIN_MAX_AGE:
                    out.append(self.ok(state, "Strict-Transport-Security max-age is at least 6 months"))
                else:
                    out.append(self.meh(state, "Strict-Transport-Security max-age is less than 6 months"))

        directives = DirectiveList(sts)
        if "includesubdomains" in directives:
            out.append(self.ok(state, "Strict-Transport-Security specifies includeSubDomains"))
        else:
            out.append(self.meh(state, "Strict-Transport-Security, but no includeSubDomains"))
        if "preload" in directives:
            out.append(self.ok(state, "Strict-Transport-Security specifies preload"))
        else:
            out.append(self.meh(state, "Strict-Transport-Security, but no preload"))
        return out

    def _frame_options(self, state, xfo: Optional[str]) -> List[Finding]:
        if xfo is None:
            return [self.fail(state, "X-Frame-Options missing")]
        value = xfo.lower()
        if value == "deny":
            return [self.ok(state, "X-Frame-Options is 'deny'")]
        if value == "sameorigin":
            return [self.meh(state, "X-Frame-Options is 'sameorigin', consider 'deny'")]
        if value.startswith("allow-from"):
            return [self.meh(state, "X-Frame-Options is 'allow-from', consider 'deny' or 'none'")]
        return [self.unk(state, f"X-Frame-Options set to something weird: {xfo}")]

    def _content_type_options(self, state, xcto: Optional[str]) -> List[Finding]:
        if xcto is None:
            return [self.fail(state, "X-Content-Type-Options missing")]
        if xcto.lower() == "nosniff":
            return [self.ok(state, "X-Content-Type-Options is 'nosniff'")]
        return [self.unk(state, f"X-Content-Type-Options set to something weird: {xcto}")]

    def _xss_protection(self, state, xxp: Optional[str]) -> List[Finding]:
        if xxp is None:
            return [self.fail(state, "X-XSS-Protection missing")]
        value = xxp.lower()
        if value == "0":
            return [self.fail(state, "X-XSS-Protection is '0'; XSS filtering disabled")]
        if value.startswith("1"):
            if "mode=block" in value:
                return [self.ok(state, "X-XSS-Protection specifies mode=block")]
            return [self.meh(state, "X-XSS-Protection sanitizes but doesn't block, consider mode=block?")]
        # unrecognized values are not reported
        return []

    def _referrer_policy(self, state, rp: Optional[str]) -> List[Finding]:
        if rp is None:
            return [self.fail(state, "Referrer-Policy missing")]
        value = rp.lower()
        if value == "no-referrer":
            return [self.ok(state, "Referrer-Policy specifies 'no-referrer'")]
        if value in _WEAK_REFERRER_POLICIES:
            return [self.meh(state, f"Referrer-Policy specifies '{value}', consider 'no-referrer'?")]
        return []

    def _csp(self, state, csp: Optional[str]) -> List[Finding]:
        if csp is None:
            return [self.fail(state, "Content-Security-Policy missing")]

        out = []
        default_src = get_field("default-src", csp)
        if default_src is None:
            out.append(self.fail(state, "Content-Security-Policy 'default-src' is missing"))
        elif default_src.replace("'", "").replace('"', "").strip() == "none":
            out.append(self.ok(state, "Content-Security-Policy 'default-src' is 'none'"))
        else:
            out.append(self.meh(state, f"Content-Security-Policy 'default-src' is '{default_src}'"))

        if "unsafe-inline" in csp:
            out.append(self.fail(state, "Content-Security-Policy has one or more 'unsafe-inline' policies"))
        if "unsafe-eval" in csp:
            out.append(self.fail(state, "Content-Security-Policy has one or more 'unsafe-eval' policies"))
        return out

    def _feature_policy(self, state, fp: Optional[str]) -> List[Finding]:
        if fp is None:
            return [self.fail(state, "Feature-Policy missing")]
        return [self.skip(state, "Feature-Policy checks not implemented yet")]
