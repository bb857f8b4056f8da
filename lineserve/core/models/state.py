import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lineserve.core.transport.protocol import LineProtocol


class SessionState(StrEnum):
    awaiting_request = "AWAITING_REQUEST"
    processing = "PROCESSING"
    responding = "RESPONDING"
    closed = "CLOSED"


@dataclass
class ServerState:
    """
    Shared runtime state for a LineServer.

    This object is mutated by:
    - LineProtocol: adds/removes active connections
    - LineProtocol: registers the session task it spawns
    - LineServer.shutdown(): waits for connections and tasks to complete
    """
    connections: set["LineProtocol"] = field(default_factory=set)
    """
    Set of active LineProtocol instances. Each TCP connection corresponds
    to one LineProtocol and one Session.
    """

    tasks: set[asyncio.Task[None]] = field(default_factory=set)
    """
    Set of running session tasks. Each task removes itself on completion
    through task.add_done_callback(tasks.discard).
    """

    slots: asyncio.Semaphore | None = None
    """
    Bounds the number of sessions running their application at once.
    None means unbounded.
    """
