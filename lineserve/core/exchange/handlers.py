"""
Pure request-to-response mappings for each exchange kind.

They never touch a connection: the applications in `chat` and `compute`
collect the request lines, call one of these, and write the result.
"""
import re

from lineserve.core.errors import MalformedRequest
from lineserve.core.models.exchange import Request, Response

DEFAULT_PREFIX = "Server"

# Keeps the square under the interpreter's int-to-str digit limit (4300).
MAX_OPERAND_DIGITS = 2000

_OPERAND = re.compile(r"[+-]?[0-9]+")


def parse_operand(line: str) -> int:
    """
    Parse a signed decimal integer: an optional sign followed by ASCII
    digits, with nothing else on the line.
    """
    if not _OPERAND.fullmatch(line):
        raise MalformedRequest(f"Not an integer: {line!r}")

    digits = len(line.lstrip("+-"))
    if digits > MAX_OPERAND_DIGITS:
        raise MalformedRequest(f"Integer too long: {digits} digits, at most {MAX_OPERAND_DIGITS}")

    return int(line)


def echo(request: Request, prefix: str = DEFAULT_PREFIX) -> Response:
    return Response(lines=tuple(f"{prefix}:{line}" for line in request.lines))


def compute(request: Request) -> Response:
    numbers = [parse_operand(line) for line in request.lines]
    return Response(lines=tuple(f"Square of {n}: {n * n}" for n in numbers))
