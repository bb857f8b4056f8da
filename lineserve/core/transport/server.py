import asyncio
import logging

from lineserve.core.errors import BindError
from lineserve.core.models.config import ServerConfig
from lineserve.core.models.endpoint import Endpoint
from lineserve.core.models.state import ServerState
from lineserve.core.throttling.backoff import ExponentialBackoff
from lineserve.core.transport.protocol import LineProtocol


class LineServer:
    """
    Owns the lifecycle of a TCP server that accepts client connections,
    instantiates a LineProtocol for each connection, and coordinates
    graceful shutdown.

    It binds to the configured host and port, using asyncio's create_server
    to create an asyncio.Server that dispatches new connections to
    LineProtocol instances. Every connection gets its own Session task, so
    the accept loop never waits on a session's I/O, and a failing session
    is contained in its own task.

    The server does not implement any exchange logic itself. It hands the
    configured Application to each connection.

    When `limit_concurrency` is positive, at most that many sessions run
    their exchange at once; later connections wait for a free slot.

    On shutdown, LineServer closes the listening socket, asks every active
    session to drain (finish its current turn, then stop), and waits for
    connections and session tasks to complete. If the graceful shutdown
    timeout is exceeded, remaining tasks are cancelled and an error is logged.
    """
    def __init__(
        self,
        config: ServerConfig,
        loop: asyncio.AbstractEventLoop | None = None,
        backoff: ExponentialBackoff | None = None,
    ) -> None:
        self._config = config
        self._loop = loop or asyncio.get_event_loop()
        self._backoff = backoff or ExponentialBackoff()
        slots = None
        if config.limit_concurrency > 0:
            slots = asyncio.Semaphore(config.limit_concurrency)
        self.state = ServerState(slots=slots)
        self._logger = logging.getLogger("core.transport.server")

        self._server: asyncio.AbstractServer | None = None

    @property
    def running(self) -> bool:
        return self._server is not None and self._server.is_serving()

    @property
    def endpoint(self) -> Endpoint:
        """The endpoint actually bound, with an OS-assigned port resolved."""
        if self._server is None or not self._server.sockets:
            raise RuntimeError("Server is not started")
        host, port = self._server.sockets[0].getsockname()[:2]
        return Endpoint(host=host, port=port)

    def create_protocol(self) -> asyncio.Protocol:
        return LineProtocol(
            config=self._config,
            server_state=self.state,
            loop=self._loop,
        )

    async def start(self) -> None:
        config = self._config
        attempts = max(config.bind_retries, 0) + 1

        for attempt in range(1, attempts + 1):
            try:
                self._server = await self._loop.create_server(
                    self.create_protocol,
                    host=config.host,
                    port=config.port,
                    backlog=config.backlog,
                    reuse_address=True,
                )
                break
            except OSError as ex:
                if attempt >= attempts:
                    raise BindError(
                        f"Unable to listen on {config.host}:{config.port}: {ex}"
                    ) from ex

                delay = self._backoff.next_delay()
                self._logger.warning(
                    f"Bind to {config.host}:{config.port} failed: {ex}. "
                    f"Retrying in {delay:.1f}s ({attempt}/{attempts - 1})"
                )
                await asyncio.sleep(delay)

        self._backoff.reset()
        self._logger.info(f"Listening on {self.endpoint}")

    async def shutdown(self) -> None:
        if self._server:
            self._server.close()

        for connection in self.state.connections.copy():
            connection.shutdown()

        try:
            await asyncio.wait_for(
                self._wait_task_complete(),
                timeout=self._config.timeout_graceful_shutdown
            )
        except asyncio.TimeoutError:
            self._logger.error(
                f"Cancel {len(self.state.tasks)} running session(s), "
                f"timeout graceful shutdown: {self.state.tasks}"
            )
            for task in self.state.tasks:
                task.cancel("Session cancelled, timeout graceful shutdown exceeded")

    async def _wait_task_complete(self) -> None:
        if self.state.tasks:
            self._logger.info("Waiting for sessions to finish their current turn.")

        while self.state.tasks:
            await asyncio.sleep(0.1)

        if self.state.connections:
            self._logger.info("Waiting for client connections to close.")

        while self.state.connections:
            await asyncio.sleep(0.1)

        if self._server:
            await self._server.wait_closed()
