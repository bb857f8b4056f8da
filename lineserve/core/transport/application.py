from typing import Protocol

from lineserve.core.models.exchange import ReceiveLine, SendLine


class Application(Protocol):
    """
    This interface defines the per-connection exchange executed by the Session.

    An Application is an asynchronous callable that receives two functions:
    `receive`, which waits for and returns the next incoming line (or None
    once the peer has closed), and `send`, which writes one line to the peer.
    The Application implements the exchange for a single TCP connection by
    calling `receive()` to consume request lines and `send(line)` to produce
    response lines.

    The Application runs until it returns or raises an exception. When it
    exits, the underlying connection is closed by the Session.

    The Application does not handle framing, deadlines, or transport-level
    concerns. These responsibilities belong to the LineProtocol and the Session.
    """
    async def __call__(self, receive: ReceiveLine, send: SendLine) -> None:
        ...
