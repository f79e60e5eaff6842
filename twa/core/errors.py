"""Exception taxonomy."""


class TWAError(Exception):
    pass


class UsageError(TWAError):
    """Bad command-line invocation."""


class ConfigError(UsageError):
    """Bad value in the environment."""


class FetchError(TWAError):
    """A network operation failed (refused, DNS, protocol, bad URL)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class FetchTimeout(FetchError):
    pass
