import argparse
import logging
import sys

from linectl.bootstrap.deps import get_client
from linectl.core.cmd import ChatCmd
from linectl.core.compute import run_compute
from lineserve.core.errors import LineServeError, MalformedRequest
from lineserve.core.exchange.handlers import parse_operand
from lineserve.core.helpers.utils import setup_logging


def _operand(text: str) -> int:
    try:
        return parse_operand(text)
    except MalformedRequest as ex:
        raise argparse.ArgumentTypeError(str(ex)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linectl",
        description="Talk to a line protocol server.",
    )
    parser.add_argument("--lineconf", help="Path to a lineconf.yaml file")
    parser.add_argument("--context", help="Context of lineconf.yaml to use")
    parser.add_argument("--server", help="Server address (host:port), overrides the context")
    parser.add_argument(
        "-l", "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    sub = parser.add_subparsers(dest="namespace", required=True)

    sub.add_parser("chat", help="Send lines read from standard input, print each response")

    compute = sub.add_parser("compute", help="Ask the server for the squares of two integers")
    compute.add_argument("first", type=_operand, nargs="?")
    compute.add_argument("second", type=_operand, nargs="?")

    return parser


def _prompt_operand(label: str) -> int:
    while True:
        text = input(f"Enter {label} number: ").strip()
        try:
            return parse_operand(text)
        except MalformedRequest as ex:
            print(str(ex), file=sys.stderr)


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger("linectl.cli")

    try:
        client = get_client(args)
    except (OSError, ValueError) as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1

    try:
        if args.namespace == "chat":
            client.connect()
            interactive = sys.stdin.isatty()
            ChatCmd(client, stdin=sys.stdin, stdout=sys.stdout, interactive=interactive).cmdloop()
        else:
            first = args.first if args.first is not None else _prompt_operand("first")
            second = args.second if args.second is not None else _prompt_operand("second")
            client.connect()
            run_compute(client, first, second, sys.stdout)
    except LineServeError as ex:
        logger.debug("Request failed", exc_info=ex)
        print(f"Error: {ex}", file=sys.stderr)
        return 1
    except OSError as ex:
        print(f"Error: connection to {client.endpoint} failed: {ex}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        return 1
    finally:
        client.close()

    return 0


def main():
    raise SystemExit(run())


if __name__ == "__main__":
    main()
