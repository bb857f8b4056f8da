import logging

from lineserve.core.exchange.handlers import DEFAULT_PREFIX, echo
from lineserve.core.models.exchange import ReceiveLine, Request, SendLine


class ChatApplication:
    """
    Answers every line received with ``<prefix>:<line>``, one turn at a
    time, until the peer closes the connection.

    The response to a line is always written before the next line is read,
    so there is at most one outstanding request per connection.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self.prefix = prefix
        self._logger = logging.getLogger("core.exchange.chat")

    async def __call__(self, receive: ReceiveLine, send: SendLine) -> None:
        while True:
            line = await receive()
            if line is None:
                break

            self._logger.debug(f"Client msg: {line}")
            response = echo(Request(lines=(line,)), self.prefix)
            for out in response.lines:
                await send(out)
