"""Stage 3: the server should disclose a minimum amount of information about itself."""

from typing import List

from twa.checkers.base import BaseStage
from twa.core.models import Finding, PipelineState
from twa.parsers.headers import get_header

# Nonstandard headers that identify the stack behind the site
IDENTIFYING_HEADERS = ["X-Powered-By", "Via", "X-AspNet-Version", "X-AspNetMvc-Version"]


class Disclosure(BaseStage):
    """
    Audits the header set already held in ``state.headers`` (HTTPS when
    stage 2 ran, otherwise the plain-HTTP one from stage 1). No fetch.
    """

    name = "Stage 3: Information disclosure"

    def run(self, state: PipelineState) -> List[Finding]:
        headers = state.headers
        if headers is None:
            return [self.unk(state, "no response headers available to check for disclosure")]

        out = []
        server = get_header("Server", headers)
        if server is None:
            out.append(self.ok(state, "Site doesn't send 'Server' header"))
        elif len(server.split()) <= 1:
            if "/" in server:
                out.append(self.fail(
                    state, f"Site sends 'Server' with what looks like a version tag: {server}"))
            else:
                out.append(self.ok(
                    state, f"Site sends 'Server', but probably only a vendor ID: {server}"))
        else:
            out.append(self.fail(
                state, f"Site sends a long 'Server', probably disclosing version info: {server}"))

        for name in IDENTIFYING_HEADERS:
            content = get_header(name, headers)
            if content is None:
                out.append(self.ok(state, f"Site doesn't send '{name}'"))
            else:
                out.append(self.fail(
                    state, f"Site sends '{name}', probably disclosing version info: '{content}'"))
        return out
