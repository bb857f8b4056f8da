import argparse
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lineserve",
        description=(
            "Start a line protocol server.\n\n"
            "Every connection runs one exchange: 'chat' echoes each line back\n"
            "with a prefix, 'compute' answers two integers with their squares.\n"
            "No argument is required; the port defaults to 12345 and may be\n"
            "set through the PORT environment variable."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a lineserve configuration file (YAML)"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity for the server.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "DEBUG    → every connection and every line handled.\n"
            "INFO     → startup, shutdown and listening address (default).\n"
            "WARNING  → failed sessions, bind retries.\n"
            "ERROR    → transport errors only.\n"
            "CRITICAL → fatal startup failures only."
        ),
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path | None:
    args = get_cli_args()

    # Priority: CLI > ENV > optional default file in current working directory
    raw = args.config or os.getenv("LINESERVECONFIG")

    if raw is None:
        file = Path.cwd() / "lineserve.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the LINESERVECONFIG environment variable\n"
            "  - Or omit both to run with the built-in defaults."
        )

    return file
