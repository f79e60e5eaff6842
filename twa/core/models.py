"""Shared data models for the auditor."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from twa.parsers.headers import HeaderSet


class Severity(str, Enum):
    PASS = "PASS"      # check satisfied
    MEH = "MEH"        # minor improvement possible
    FAIL = "FAIL"      # should be fixed
    FATAL = "FATAL"    # critical, blocks dependent checks
    UNK = "UNK"        # unrecognized server response
    SKIP = "SKIP"      # check not implemented


@dataclass(frozen=True)
class Finding:
    """A single classified audit result."""
    domain: str
    severity: Severity
    message: str

    def __str__(self):
        return f"{self.severity.value}({self.domain}): {self.message}"


@dataclass
class HttpResponse:
    """Status line and headers of one fetch. Bodies are never kept."""
    url: str
    status_code: int
    headers: HeaderSet = field(default_factory=HeaderSet)


@dataclass
class PipelineState:
    """Per-invocation state threaded through every stage."""
    domain: str
    www: bool = False
    verbose: bool = False
    no_https: bool = False                # written by reachability only
    headers: Optional[HeaderSet] = None   # latest header set fetched for the domain


class Report:
    """Append-only, ordered sequence of findings for one domain."""

    def __init__(self, domain: str):
        self.domain = domain
        self._findings: List[Finding] = []

    def append(self, finding: Finding) -> None:
        self._findings.append(finding)

    def counts(self) -> Dict[Severity, int]:
        tally = {sev: 0 for sev in Severity}
        for f in self._findings:
            tally[f.severity] += 1
        return tally

    @property
    def findings(self) -> List[Finding]:
        return list(self._findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self._findings)

    def __len__(self):
        return len(self._findings)
