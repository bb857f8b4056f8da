import asyncio
import os

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from lineserve.bootstrap.config.settings import LineServeConfig
from lineserve.core.models.config import ServerConfig
from lineserve.core.transport.application import Application
from lineserve.core.transport.server import LineServer


class FakeLineServeConfig(LineServeConfig):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        if file := os.environ.get("TEST_LINESERVECONFIG"):
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=file),)
        return sources


def make_config(app: Application, **overrides) -> ServerConfig:
    values = dict(
        app=app,
        host="127.0.0.1",
        port=0,
        backlog=128,
        max_line_size=1024,
        read_timeout=2.0,
        write_timeout=2.0,
        timeout_graceful_shutdown=1.0,
    )
    values.update(overrides)
    return ServerConfig(**values)


async def start_server(app: Application, **overrides) -> LineServer:
    server = LineServer(make_config(app, **overrides), asyncio.get_event_loop())
    await server.start()
    return server


async def read_lines(reader: asyncio.StreamReader, timeout: float = 2.0) -> list[str]:
    """Read every line until the server closes the connection."""
    try:
        data = await asyncio.wait_for(reader.read(), timeout)
    except ConnectionResetError:
        return []
    return data.decode().splitlines()


async def exchange(port: int, payload: bytes, timeout: float = 2.0) -> list[str]:
    reader, writer = await asyncio.open_connection("127.0.0.1", port)
    try:
        writer.write(payload)
        await writer.drain()
        return await read_lines(reader, timeout)
    finally:
        writer.close()
        await writer.wait_closed()
