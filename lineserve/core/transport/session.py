import asyncio
import logging
from typing import Callable

from lineserve.core.errors import EndOfStream, LineServeError, SessionTimeout
from lineserve.core.models.state import SessionState
from lineserve.core.transport.application import Application
from lineserve.core.transport.flow import FlowControl
from lineserve.core.transport.framing import encode_line

# Socket reads are paused once this many lines are waiting for the Application.
MAX_PENDING_LINES = 8


class Session:
    """
    Drives the exchange for a single accepted TCP connection.

    It receives decoded lines from the LineProtocol through an internal queue
    and exposes them to the Application via the asynchronous `receive()`
    method. When the Application sends a response line, the Session encodes
    it and writes it to the transport immediately.

    Reads and writes strictly alternate, and the Session tracks where the
    exchange stands:

        AWAITING_REQUEST -> PROCESSING -> RESPONDING -> AWAITING_REQUEST ...

    Each read is bounded by `read_timeout` and each blocked write by
    `write_timeout`; an expired deadline raises SessionTimeout inside the
    Application.

    Read-ahead is bounded: reading from the socket is paused while
    `max_pending_lines` lines are queued, and while the Session waits for a
    free slot under the server's concurrency limit. Each consumed line calls
    `refill` so the protocol can top the queue up from bytes it already holds.

    The `run_app()` method executes the Application for the lifetime of the
    connection. Whatever the Application raises is contained and logged here,
    so a failing exchange never reaches the server's accept loop. When the
    Application returns or fails, the Session closes the transport and
    enters the terminal CLOSED state.

    When the server drains, `drain()` lets the current turn complete. A
    request is in progress from its first line until the first response line
    is sent; lines that complete it are still delivered. Once no request is
    in progress, `receive()` reports end of stream instead of waiting for
    the peer.
    """
    def __init__(
        self,
        transport: asyncio.Transport,
        flow: FlowControl,
        queue: asyncio.Queue[str | None],
        read_timeout: float | None = None,
        write_timeout: float | None = None,
        slots: asyncio.Semaphore | None = None,
        peer: str = "",
        max_pending_lines: int = MAX_PENDING_LINES,
        refill: Callable[[], None] | None = None,
    ) -> None:
        self.queue = queue
        self.state = SessionState.awaiting_request
        self.draining = False
        self._transport = transport
        self._flow = flow
        self._read_timeout = read_timeout
        self._write_timeout = write_timeout
        self._slots = slots
        self._peer = peer
        self._max_pending_lines = max_pending_lines
        self._refill = refill
        self._request_lines = 0
        self._reading_paused = False
        self._waiting_for_slot = False
        self._logger = logging.getLogger("core.transport.session")

    @property
    def in_request(self) -> bool:
        """True once a request line was read and no response was sent yet."""
        return self._request_lines > 0

    @property
    def room(self) -> int:
        """Number of lines that can be queued before reading is paused."""
        return max(self._max_pending_lines - self.queue.qsize(), 0)

    def feed(self, line: str) -> None:
        self.queue.put_nowait(line)
        self._update_reading()

    async def send(self, line: str) -> None:
        self.state = SessionState.responding
        self._request_lines = 0

        if self._flow.write_paused:
            await self._flow.drain(self._write_timeout)

        if self._transport.is_closing():
            raise EndOfStream("Connection closed before the response was written")

        self._transport.write(encode_line(line))

    async def receive(self) -> str | None:
        if self.draining and not self.in_request:
            return None

        self.state = SessionState.awaiting_request
        try:
            line = await asyncio.wait_for(self.queue.get(), self._read_timeout)
        except asyncio.TimeoutError:
            raise SessionTimeout(f"No line received within {self._read_timeout}s") from None

        if self._refill is not None:
            self._refill()
        self._update_reading()

        if line is None or (self.draining and not self.in_request):
            return None

        self._request_lines += 1
        self.state = SessionState.processing
        return line

    def drain(self) -> None:
        self.draining = True
        # Mid-request sessions keep reading until the request is complete.
        if not self.in_request:
            self.queue.put_nowait(None)

    def _update_reading(self) -> None:
        hold = self._waiting_for_slot or self.queue.qsize() >= self._max_pending_lines
        if hold and not self._reading_paused:
            self._reading_paused = True
            self._transport.pause_reading()
        elif not hold and self._reading_paused:
            self._reading_paused = False
            self._transport.resume_reading()

    async def run_app(self, app: Application) -> None:
        try:
            if self._slots is None:
                await app(self.receive, self.send)
            else:
                if self._slots.locked():
                    self._logger.debug(f"{self._peer} - Waiting for a free session slot")
                    self._waiting_for_slot = True
                    self._update_reading()

                async with self._slots:
                    self._waiting_for_slot = False
                    self._update_reading()
                    await app(self.receive, self.send)
        except LineServeError as exc:
            self._logger.warning(f"{self._peer} - Session closed: {exc.__class__.__name__}: {exc}")
        except OSError as exc:
            self._logger.error(f"{self._peer} - Transport error: {exc}")
        except Exception as exc:
            self._logger.error(f"{self._peer} - Exception in Application", exc_info=exc)
        finally:
            self.state = SessionState.closed
            self._transport.close()
