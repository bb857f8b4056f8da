import os

import pytest
from pydantic import ValidationError

from lineserve.core.models.exchange import ExchangeKind
from tests.helpers import FakeLineServeConfig


@pytest.mark.ut
def test_defaults_without_file(clean_env):
    config = FakeLineServeConfig()

    assert config.host == "0.0.0.0"
    assert config.port == 12345
    assert config.exchange.kind == ExchangeKind.chat
    assert config.exchange.prefix == "Server"
    assert config.server.read_timeout == 30.0
    assert config.server.bind_retries == 0


@pytest.mark.ut
def test_yaml_file_values(line_config):
    assert line_config.host == "127.0.0.1"
    assert line_config.port == 4000
    assert line_config.exchange.kind == ExchangeKind.compute
    assert line_config.server.limit_concurrency == 8
    assert line_config.server.max_line_size == 1024
    assert line_config.server.read_timeout == 2.5
    assert line_config.server.write_timeout == 10.0


@pytest.mark.ut
def test_port_environment_variable_overrides_file(config_file, clean_env):
    os.environ["TEST_LINESERVECONFIG"] = str(config_file)
    os.environ["PORT"] = "5555"

    assert FakeLineServeConfig().port == 5555


@pytest.mark.ut
def test_nested_environment_variable(clean_env):
    os.environ["LINESERVE_SERVER__READ_TIMEOUT"] = "1.5"
    os.environ["LINESERVE_EXCHANGE__PREFIX"] = "Bot"

    config = FakeLineServeConfig()

    assert config.server.read_timeout == 1.5
    assert config.exchange.prefix == "Bot"


@pytest.mark.ut
def test_init_arguments_win(clean_env):
    os.environ["PORT"] = "5555"

    assert FakeLineServeConfig(port=0).port == 0


@pytest.mark.ut
@pytest.mark.parametrize("override", [
    {"port": 70000},
    {"exchange": {"kind": "unknown"}},
    {"server": {"read_timeout": -1}},
    {"exchange": {"prefix": "two\nlines"}},
])
def test_invalid_values(clean_env, override):
    with pytest.raises(ValidationError):
        FakeLineServeConfig(**override)
