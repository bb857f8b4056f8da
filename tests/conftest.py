import os
from typing import Generator

import pytest
import yaml

from tests.fake.fake_transport import FakeTransport
from tests.helpers import FakeLineServeConfig


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "lineserve.yaml"

    data = {
        "host": "127.0.0.1",
        "port": 4000,
        "exchange": {
            "kind": "compute",
        },
        "server": {
            "backlog": 10,
            "limit_concurrency": 8,
            "max_line_size": 1024,
            "read_timeout": 2.5,
            "timeout_graceful_shutdown": 1,
        },
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    backup = os.environ.copy()

    try:
        for name in list(os.environ):
            if name.startswith("LINESERVE") or name in ("PORT", "TEST_LINESERVECONFIG"):
                del os.environ[name]
        yield
    finally:
        os.environ.clear()
        os.environ.update(backup)


@pytest.fixture
def line_config(config_file, clean_env) -> FakeLineServeConfig:
    os.environ["TEST_LINESERVECONFIG"] = str(config_file)
    return FakeLineServeConfig()
