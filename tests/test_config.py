import pytest

from twa.core.config import DEFAULT_PROBE_TIMEOUT, DEFAULT_TIMEOUT, VERSION, Config, parse_client_opts
from twa.core.errors import ConfigError, UsageError


def test_defaults():
    config = Config.from_env({})
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.probe_timeout == DEFAULT_PROBE_TIMEOUT
    assert config.user_agent == f"twa/{VERSION}"
    assert config.verify is True
    assert config.proxy is None
    assert config.no_color is False


def test_overrides():
    config = Config.from_env({
        "TWA_TIMEOUT": "12.5",
        "TWA_PROBE_TIMEOUT": "1",
        "TWA_USER_AGENT": "Mozilla/5.0",
        "TWA_CLIENTOPTS": "proxy=http://127.0.0.1:8080 verify=false",
        "NO_COLOR": "1",
    })
    assert config.timeout == 12.5
    assert config.probe_timeout == 1.0
    assert config.user_agent == "Mozilla/5.0"
    assert config.proxy == "http://127.0.0.1:8080"
    assert config.verify is False
    assert config.no_color is True


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_bad_timeout(value):
    with pytest.raises(ConfigError):
        Config.from_env({"TWA_TIMEOUT": value})


@pytest.mark.parametrize("raw", ["insecure", "retries=3", "verify=maybe"])
def test_bad_client_opts(raw):
    with pytest.raises(UsageError):
        parse_client_opts(raw)


def test_empty_client_opts():
    assert parse_client_opts("   ") == {}


def test_empty_no_color_keeps_colors():
    assert Config.from_env({"NO_COLOR": ""}).no_color is False
