"""Stage 5: the site should serve a robots.txt."""

from typing import List

from twa.checkers.base import BaseStage
from twa.core.models import Finding, PipelineState


class Robots(BaseStage):

    name = "Stage 5: robots.txt"

    def run(self, state: PipelineState) -> List[Finding]:
        url = f"http://{state.domain}/robots.txt"
        code = self.client.status(url)
        if code == 200:
            return [self.ok(state, f"Site has a robots file at: {url}")]
        if code == 404:
            return [self.meh(state, f"No robots file found at: {url}")]
        return [self.unk(state, f"Got a weird response code ({code}) when fetching: {url}")]
