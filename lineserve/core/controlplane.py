import asyncio
import logging

from lineserve.bootstrap.config.settings import LineServeConfig
from lineserve.core.models.config import ServerConfig
from lineserve.core.routing.router import ExchangeRouter
from lineserve.core.transport.server import LineServer


class ControlPlane:
    """
    Wires the validated configuration, the exchange registered for the
    configured kind, and the LineServer, and runs them on a dedicated
    event loop until a stop event is set.
    """
    def __init__(
        self,
        config: LineServeConfig,
        router: ExchangeRouter,
    ) -> None:
        self._config = config
        self._router = router
        self._loop = self._create_event_loop()
        self._server_config = self._build_server_config()
        self._server = LineServer(
            config=self._server_config,
            loop=self._loop,
        )
        self._logger = logging.getLogger("lineserve.controlplane")

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def server(self) -> LineServer:
        return self._server

    async def start(self, stop_event: asyncio.Event) -> None:
        exchange = self._config.exchange.kind
        await self._server.start()
        self._logger.info(f"Serving '{exchange}' exchange on {self._server.endpoint}")

        await stop_event.wait()
        await self.stop()

    async def stop(self) -> None:
        if self._server.running:
            self._logger.info("Shutting down line server.")
            await self._server.shutdown()
        else:
            self._logger.info("Line server is not running, skip shutting down.")

    def _build_server_config(self) -> ServerConfig:
        server_config = self._config.server
        exchange_config = self._config.exchange

        app = self._router.build(
            exchange_config.kind,
            exchange_config.model_dump(exclude={"kind"}),
        )

        return ServerConfig(
            app=app,
            host=self._config.host,
            port=self._config.port,
            backlog=server_config.backlog,
            limit_concurrency=server_config.limit_concurrency,
            max_line_size=server_config.max_line_size,
            read_timeout=server_config.read_timeout,
            write_timeout=server_config.write_timeout,
            timeout_graceful_shutdown=server_config.timeout_graceful_shutdown,
            bind_retries=server_config.bind_retries,
        )

    @staticmethod
    def _create_event_loop() -> asyncio.AbstractEventLoop:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop
