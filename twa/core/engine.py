from typing import List, Optional

from twa.checkers.base import BaseStage
from twa.checkers.disclosure import Disclosure
from twa.checkers.reachability import Reachability
from twa.checkers.redirect import Redirect
from twa.checkers.repository import ExposedRepository
from twa.checkers.robots import Robots
from twa.checkers.security_headers import SecurityHeaders
from twa.core.client import HttpClient
from twa.core.config import VERSION
from twa.core.models import Finding, PipelineState, Report, Severity

# Fixed order: reachability must finish before security headers read no_https,
# and disclosure reads the headers the two fetch stages leave behind.
STAGES = [Reachability, Redirect, SecurityHeaders, Disclosure, ExposedRepository, Robots]


class Engine:
    def __init__(self, client: HttpClient, logger=None):
        self.name = "twa"
        self.version = VERSION
        self.client = client
        self.logger = logger
        self.stages: List[BaseStage] = [stage(client) for stage in STAGES]

    def _emit(self, report: Report, finding: Finding):
        report.append(finding)
        if self.logger:
            self.logger.finding(finding)

    def run(self, domain: str, verbose: bool = False) -> Report:
        return self.execute(PipelineState(domain=domain, verbose=verbose))

    def execute(self, state: PipelineState) -> Report:
        domain = state.domain
        report = Report(domain)
        trace = self.logger if self.logger and state.verbose else None
        if trace:
            trace.debug(f"{self.name} {self.version}: auditing {domain}")

        for stage in self.stages:
            if trace:
                trace.debug(f"{stage.name} ({domain})")
            try:
                findings = stage.execute(state)
            except Exception as e:
                # anything escaping a stage is reported, later stages still run
                if self.logger:
                    self.logger.error(f"{stage.name} crashed: {e!r}")
                findings = [Finding(domain, Severity.UNK, f"{stage.name} failed unexpectedly: {e}")]
            for finding in findings:
                self._emit(report, finding)

        if trace:
            tally = ", ".join(f"{sev.value}={n}" for sev, n in report.counts().items() if n)
            trace.debug(f"{domain}: {len(report)} findings ({tally or 'none'})")
        return report

    def audit(self, domain: str, www: bool = False, verbose: bool = False) -> List[Report]:
        """Audit *domain* and, with *www*, its www. variant in the same process."""
        state = PipelineState(domain=domain, www=www, verbose=verbose)
        reports = [self.execute(state)]
        if state.www:
            mirror = self.www_variant(domain)
            if mirror is None:
                if self.logger:
                    self.logger.warn(f"{domain} already starts with www, not auditing it twice")
            else:
                reports.append(self.run(mirror, verbose=state.verbose))
        return reports

    @staticmethod
    def www_variant(domain: str) -> Optional[str]:
        if domain.lower().startswith("www"):
            return None
        return f"www.{domain}"
