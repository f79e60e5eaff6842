"""Runtime configuration, read from the environment once per process."""

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from twa.core.errors import ConfigError

VERSION = "1.0.0"

DEFAULT_TIMEOUT = 5.0
DEFAULT_PROBE_TIMEOUT = 2.0

_CLIENT_OPTS = {"proxy", "verify"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _seconds(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def parse_client_opts(raw: str) -> Dict[str, object]:
    """
    Parse TWA_CLIENTOPTS: whitespace separated key=value tokens.

        TWA_CLIENTOPTS="proxy=http://127.0.0.1:8080 verify=false"
    """
    opts: Dict[str, object] = {}
    for token in raw.split():
        key, sep, value = token.partition("=")
        key = key.strip().lower()
        if not sep or key not in _CLIENT_OPTS:
            raise ConfigError(f"unsupported TWA_CLIENTOPTS entry: {token!r}")
        if key == "verify":
            if value.lower() in _TRUE:
                opts[key] = True
            elif value.lower() in _FALSE:
                opts[key] = False
            else:
                raise ConfigError(f"verify expects true/false, got {value!r}")
        else:
            opts[key] = value
    return opts


@dataclass(frozen=True)
class Config:
    timeout: float = DEFAULT_TIMEOUT
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    user_agent: str = f"twa/{VERSION}"
    proxy: Optional[str] = None
    verify: bool = True
    no_color: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if env is None else env
        opts = parse_client_opts(env.get("TWA_CLIENTOPTS", ""))
        return cls(
            timeout=_seconds(env, "TWA_TIMEOUT", DEFAULT_TIMEOUT),
            probe_timeout=_seconds(env, "TWA_PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT),
            user_agent=env.get("TWA_USER_AGENT") or f"twa/{VERSION}",
            proxy=opts.get("proxy"),
            verify=opts.get("verify", True),
            no_color=bool(env.get("NO_COLOR")),
        )
