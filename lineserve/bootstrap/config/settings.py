from typing import Annotated

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from lineserve.bootstrap.config.loader import get_configfile
from lineserve.core.exchange.handlers import DEFAULT_PREFIX
from lineserve.core.models.exchange import ExchangeKind


class ExchangeSettings(BaseModel):
    kind: Annotated[
        ExchangeKind,
        Field(
            description=(
                "Exchange run on every connection.\n"
                "'chat'    → each line is answered with '<prefix>:<line>' until the client closes.\n"
                "'compute' → two integer lines are answered with their squares, then the\n"
                "            connection is closed."
            ),
            default=ExchangeKind.chat
        )
    ]

    prefix: Annotated[
        str,
        Field(
            description="Prefix of every chat response line.",
            default=DEFAULT_PREFIX,
            pattern=r"^[^\r\n]*$"
        )
    ]


class ServerSettings(BaseModel):
    backlog: Annotated[
        int,
        Field(
            description="Maximum number of pending TCP connections.",
            default=128,
            gt=0
        )
    ]

    limit_concurrency: Annotated[
        int,
        Field(
            description=(
                "Maximum number of sessions exchanging at once.\n"
                "Connections beyond this limit wait for a free slot. 0 disables the limit."
            ),
            default=1024,
            ge=0
        )
    ]

    max_line_size: Annotated[
        int,
        Field(
            description="Maximum size in bytes of a single incoming line.",
            default=64 * 1024,
            gt=0
        )
    ]

    read_timeout: Annotated[
        float | None,
        Field(
            description=(
                "Seconds a session waits for the next line before it is closed.\n"
                "null disables the deadline."
            ),
            default=30.0,
            gt=0
        )
    ]

    write_timeout: Annotated[
        float | None,
        Field(
            description=(
                "Seconds a session waits for a client that stopped reading.\n"
                "null disables the deadline."
            ),
            default=10.0,
            gt=0
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for in-flight sessions to finish on shutdown.",
            default=5.0,
            ge=0
        )
    ]

    bind_retries: Annotated[
        int,
        Field(
            description=(
                "Additional bind attempts, with exponential backoff, when the port is\n"
                "unavailable. 0 makes a bind failure immediately fatal."
            ),
            default=0,
            ge=0
        )
    ]


class LineServeConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LINESERVE_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    host: Annotated[
        str,
        Field(
            description="Bind address of the listening socket.",
            default="0.0.0.0"
        )
    ]

    port: Annotated[
        int,
        Field(
            description=(
                "TCP port of the listening socket. Also read from the PORT\n"
                "environment variable. 0 lets the OS pick a free port."
            ),
            default=12345,
            ge=0,
            le=65535,
            validation_alias=AliasChoices("port", "LINESERVE_PORT")
        )
    ]

    exchange: Annotated[
        ExchangeSettings,
        Field(
            description="Exchange served on every accepted connection.",
            default_factory=ExchangeSettings
        )
    ]

    server: Annotated[
        ServerSettings,
        Field(
            description=(
                "Runtime limits of the listening server: backlog, concurrency,\n"
                "line size, per-session deadlines and graceful shutdown."
            ),
            default_factory=ServerSettings
        )
    ]

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
        configfile = get_configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)
        return sources
