"""Stage 4: the server shouldn't be serving SCM repositories."""

from typing import List

from twa.checkers.base import BaseStage
from twa.core.errors import FetchError
from twa.core.models import Finding, PipelineState

REPO_FILES = [".git/HEAD", ".hg/store/00manifest.i", ".svn/entries"]


class ExposedRepository(BaseStage):

    name = "Stage 4: SCM repository disclosure"

    def run(self, state: PipelineState) -> List[Finding]:
        out = []
        for repo_file in REPO_FILES:
            url = f"http://{state.domain}/{repo_file}"
            try:
                code = self.client.status(url)
            except FetchError as e:
                out.append(self.unk(state, f"Couldn't test for SCM at: {url} ({e.reason})"))
                continue

            if code == 200:
                out.append(self.fail(state, f"SCM repository being served at: {url}"))
            elif code == 403:
                out.append(self.meh(
                    state, f"Possible SCM repository being served (maybe protected?) at: {url}"))
            elif code == 404:
                out.append(self.ok(state, f"No SCM repository at: {url}"))
            else:
                out.append(self.unk(
                    state, f"Got a weird response code ({code}) when testing for SCM at: {url}"))
        return out
