"""Abstract base for all audit stages."""

from abc import ABC, abstractmethod
from typing import List

from twa.core.client import HttpClient
from twa.core.errors import FetchError
from twa.core.models import Finding, PipelineState, Severity


class BaseStage(ABC):
    """Every stage must implement run(); execute() is the stage boundary."""

    name: str = "Unnamed Stage"

    def __init__(self, client: HttpClient):
        self.client = client

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    def run(self, state: PipelineState) -> List[Finding]:
        """
        Inspect the target described by *state* and return zero or more
        findings, in the order they were decided.
        """
        ...

    def execute(self, state: PipelineState) -> List[Finding]:
        """run() with network failures turned into a single UNK finding."""
        try:
            return self.run(state)
        except FetchError as e:
            return [self.unk(state, f"{self.name}: couldn't fetch {e.url} ({e.reason})")]

    # ── shared helpers ──────────────────────────────────────────

    @staticmethod
    def finding(state: PipelineState, severity: Severity, message: str) -> Finding:
        return Finding(domain=state.domain, severity=severity, message=message)

    def ok(self, state, message):
        return self.finding(state, Severity.PASS, message)

    def meh(self, state, message):
        return self.finding(state, Severity.MEH, message)

    def fail(self, state, message):
        return self.finding(state, Severity.FAIL, message)

    def fatal(self, state, message):
        return self.finding(state, Severity.FATAL, message)

    def unk(self, state, message):
        return self.finding(state, Severity.UNK, message)

    def skip(self, state, message):
        return self.finding(state, Severity.SKIP, message)
