from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Callable


class ExchangeKind(StrEnum):
    chat = "chat"
    compute = "compute"


@dataclass(frozen=True)
class Request:
    """
    The ordered lines read from a connection before a response is produced.
    One line for a chat exchange, two for a compute exchange.
    """
    lines: tuple[str, ...]


@dataclass(frozen=True)
class Response:
    """
    The ordered lines a handler produced for a single request.
    Written once, in order, and never retained.
    """
    lines: tuple[str, ...]


ReceiveLine = Callable[[], Awaitable[str | None]]
"""
Coroutine provided to the application for reading the next line.
It suspends until a line is available and returns None at end of stream.
"""


SendLine = Callable[[str], Awaitable[None]]
"""
Coroutine provided to the application for writing one line to the peer.
"""
