import sys
from colorama import Fore, Style
from datetime import datetime

from twa.core.models import Finding, Severity

_SEV_COLORS = {
    Severity.PASS: Fore.GREEN,
    Severity.MEH: Fore.YELLOW,
    Severity.FAIL: Fore.RED,
    Severity.FATAL: Fore.RED + Style.BRIGHT,
    Severity.UNK: Fore.MAGENTA,
    Severity.SKIP: Fore.CYAN,
}


class Log:
    """Findings go to *out*, diagnostics to *err*."""

    def __init__(self, verbose: bool = False, no_color: bool = False,
                 out=None, err=None):
        self.verbose = verbose
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.color = not no_color and self._isatty(self.out)

    @staticmethod
    def _isatty(stream) -> bool:
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def _diag(self, level: str, msg: str):
        print(f"{self._time()} [{level}] {msg}", file=self.err)

    def debug(self, msg: str):
        if self.verbose:
            self._diag("DEBUG", msg)

    def warn(self, msg: str):
        self._diag("WARNING", msg)

    def error(self, msg: str):
        self._diag("ERROR", msg)

    def finding(self, f: Finding):
        sev = self._paint(f.severity.value, _SEV_COLORS.get(f.severity, Fore.WHITE))
        print(f"{sev}({f.domain}): {f.message}", file=self.out)
