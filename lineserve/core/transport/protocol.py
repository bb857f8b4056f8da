import asyncio
import logging

from lineserve.core.errors import LineTooLong
from lineserve.core.models.config import ServerConfig
from lineserve.core.models.state import ServerState
from lineserve.core.transport.addr import get_remote_addr
from lineserve.core.transport.flow import FlowControl
from lineserve.core.transport.framing import LineBuffer
from lineserve.core.transport.session import Session


class LineProtocol(asyncio.Protocol):
    """
    Implements the low-level framing and connection lifecycle for a
    single TCP client. It receives raw bytes from the transport, splits them
    into newline-terminated lines with a LineBuffer, and forwards each line
    to the Session associated with the connection.

    When a connection is established, LineProtocol creates a FlowControl
    instance, registers itself in the server's connection set, and starts
    the Session task responsible for running the exchange. Incoming bytes
    are accumulated until a complete line is available.

    If a line grows beyond the configured maximum size, the connection is
    closed immediately.

    Lines are handed to the Session only while it has room for them; the
    rest stay in the LineBuffer until the Session asks for more.

    When the peer half-closes or the connection is lost, LineProtocol signals
    end of stream to the Session by pushing a sentinel value into its queue.
    Bytes of an unterminated trailing line are discarded.

    LineProtocol does not interpret lines or run exchange logic. These
    responsibilities belong to the Session and the configured Application.
    """
    def __init__(
        self,
        config: ServerConfig,
        server_state: ServerState,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._transport: asyncio.Transport = None   # type: ignore[assignment]
        self._flow: FlowControl = None  # type: ignore[assignment]
        self._session: Session = None   # type: ignore[assignment]

        self._config = config
        self._app = config.app
        self._loop = loop or asyncio.get_event_loop()
        self._state = server_state
        self._connections = server_state.connections
        self._tasks = server_state.tasks
        self._buffer = LineBuffer(config.max_line_size)
        self._eof = False
        self._client: tuple[str, int] | None = None
        self._logger = logging.getLogger("core.transport.protocol")

    @property
    def session(self) -> Session:
        return self._session

    def connection_made(self, transport: asyncio.Transport) -> None:
        self._transport = transport
        self._flow = FlowControl()
        self._connections.add(self)

        self._client = get_remote_addr(transport)
        who = "%s:%d" % self._client if self._client else ""

        self._session = Session(
            transport=self._transport,
            flow=self._flow,
            queue=asyncio.Queue(),
            read_timeout=self._config.read_timeout,
            write_timeout=self._config.write_timeout,
            slots=self._state.slots,
            peer=who,
            refill=self._deliver,
        )
        task = self._loop.create_task(self._session.run_app(self._app))
        task.add_done_callback(self._tasks.discard)
        self._tasks.add(task)

        self._logger.debug(f"{who} - Connection made")

    def connection_lost(self, exc: Exception | None) -> None:
        self._connections.discard(self)

        who = "%s:%d" % self._client if self._client else ""
        if exc is None:
            self._logger.debug(f"{who} - Connection lost.")
        else:
            self._logger.debug(f"{who} - Connection lost: {exc}")

        if self._flow is not None:
            self._flow.resume_writing()
        if exc is None:
            self._transport.close()

        self._buffer.clear()
        self._session.queue.put_nowait(None)

    def eof_received(self) -> bool:
        self._eof = True
        self._deliver()
        # Keep the write side open so a half-closed peer still gets its response.
        return True

    def data_received(self, data: bytes) -> None:
        self._deliver(data)

    def _deliver(self, data: bytes = b"") -> None:
        if self._transport.is_closing():
            return

        try:
            lines = self._buffer.feed(data, limit=self._session.room)
        except LineTooLong as exc:
            self._logger.warning(f"{exc}, closing connection")
            self._transport.close()
            return

        for line in lines:
            self._session.feed(line)

        # End of stream is queued only after every complete line buffered before it.
        if self._eof and not self._buffer.has_line:
            self._eof = False
            self._session.queue.put_nowait(None)

    def pause_writing(self) -> None:
        self._flow.pause_writing()

    def resume_writing(self) -> None:
        self._flow.resume_writing()

    def shutdown(self) -> None:
        self._session.drain()
