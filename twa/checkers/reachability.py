"""Stage 0: the server should accept connections on 443."""

from typing import List

from twa.checkers.base import BaseStage
from twa.core.models import Finding, PipelineState

HTTPS_PORT = 443


class Reachability(BaseStage):
    """
    Silent on success. On failure reports FATAL and sets ``no_https``,
    which makes the security header stage skip itself.
    """

    name = "Stage 0: Server supports HTTPS"

    def run(self, state: PipelineState) -> List[Finding]:
        if self.client.probe(state.domain, HTTPS_PORT):
            return []
        state.no_https = True
        return [self.fatal(state, f"expected port {HTTPS_PORT} to be open, but it isn't")]
