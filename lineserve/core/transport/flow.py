import asyncio

from lineserve.core.errors import SessionTimeout


class FlowControl:
    """
    Cooperative flow-control helper for asyncio TCP transports.

    This class models the writable state of a transport and provides
    an awaitable `drain()` method similar to the one available on
    asyncio StreamWriter, bounded by an optional deadline.

    It is used by the Session to:
    - hold back a response while the transport's buffer is full
    - resume sending when the transport becomes writable again
    - give up on a peer that stopped reading altogether
    """

    def __init__(self) -> None:
        self._writable = asyncio.Event()
        self._writable.set()
        self.write_paused = False

    async def drain(self, timeout: float | None = None) -> None:
        """Block until writing is allowed again, or raise SessionTimeout."""
        try:
            await asyncio.wait_for(self._writable.wait(), timeout)
        except asyncio.TimeoutError:
            raise SessionTimeout(f"Peer did not accept data within {timeout}s") from None

    def pause_writing(self) -> None:
        self.write_paused = True
        self._writable.clear()

    def resume_writing(self) -> None:
        if self.write_paused:
            self.write_paused = False
            self._writable.set()
