import logging
import socket
from collections import deque

from lineserve.core.errors import ConnectionRefused, EndOfStream, HostUnreachable, SessionTimeout
from lineserve.core.models.endpoint import Endpoint
from lineserve.core.transport.framing import LineBuffer, encode_line


class LineClient:
    """
    Synchronous TCP client for a line protocol server.

    Every record is one UTF-8 text line terminated by ``\\n``. The client
    is blocking and strictly turn-based: a request line is written, then the
    response line is read. It is intended for CLI usage, debugging, and
    simple scripts.

    Connection failures are raised as ConnectionRefused or HostUnreachable
    and are never retried.
    """
    def __init__(
        self,
        endpoint: Endpoint,
        timeout: float | None = 5.0,
        max_line_size: int = 64 * 1024,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._buffer = LineBuffer(max_line_size)
        self._lines: deque[str] = deque()
        self._sock: socket.socket | None = None
        self._logger = logging.getLogger("linectl.core.client")

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    def __enter__(self) -> "LineClient":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def connect(self) -> None:
        if self._sock is not None:
            return

        address = (self._endpoint.host, self._endpoint.port)
        try:
            self._sock = socket.create_connection(address, timeout=self._timeout)
        except ConnectionRefusedError as ex:
            raise ConnectionRefused(f"Connection refused by {self._endpoint}") from ex
        except socket.gaierror as ex:
            raise HostUnreachable(f"Unable to resolve {self._endpoint.host}: {ex}") from ex
        except TimeoutError as ex:
            raise HostUnreachable(f"Timed out connecting to {self._endpoint}") from ex
        except OSError as ex:
            raise HostUnreachable(f"Unable to reach {self._endpoint}: {ex}") from ex

        self._logger.debug(f"Connected to {self._endpoint}")

    def close(self) -> None:
        if self._sock:
            try:
                self._sock.close()
            finally:
                self._sock = None
                self._buffer.clear()
                self._lines.clear()

    def send_line(self, text: str) -> None:
        if not self._sock:
            self.connect()

        try:
            self._sock.sendall(encode_line(text))
        except TimeoutError as ex:
            raise SessionTimeout(f"Timed out sending to {self._endpoint}") from ex

    def recv_line(self) -> str:
        if not self._sock:
            self.connect()

        while not self._lines:
            try:
                chunk = self._sock.recv(4096)
            except TimeoutError as ex:
                raise SessionTimeout(f"No response from {self._endpoint} within {self._timeout}s") from ex

            if not chunk:
                raise EndOfStream("Connection closed by server")
            self._lines.extend(self._buffer.feed(chunk))

        return self._lines.popleft()

    def request(self, text: str) -> str:
        self.send_line(text)
        return self.recv_line()
