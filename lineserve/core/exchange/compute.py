import logging

from lineserve.core.errors import MalformedRequest
from lineserve.core.exchange.handlers import compute, parse_operand
from lineserve.core.models.exchange import ReceiveLine, Request, SendLine


class ComputeApplication:
    """
    Single-shot exchange: reads two integer lines, answers with the square
    of each, then returns so the Session closes the connection.

    Every line is validated as soon as it arrives. An invalid line, or the
    peer closing before both operands were read, raises MalformedRequest
    before anything is written: the client gets no partial response.
    """

    operands = 2

    def __init__(self) -> None:
        self._logger = logging.getLogger("core.exchange.compute")

    async def __call__(self, receive: ReceiveLine, send: SendLine) -> None:
        lines: list[str] = []
        while len(lines) < self.operands:
            line = await receive()
            if line is None:
                raise MalformedRequest(
                    f"Connection closed after {len(lines)} of {self.operands} operands"
                )
            parse_operand(line)
            lines.append(line)

        response = compute(Request(lines=tuple(lines)))
        self._logger.debug(f"Computed {response.lines}")

        for out in response.lines:
            await send(out)
