from dataclasses import dataclass

from lineserve.core.transport.application import Application


@dataclass
class ServerConfig:
    """
    Static configuration for a LineServer.

    This structure defines all parameters required to start a server:
    networking, resource limits, per-session deadlines, and graceful
    shutdown behavior.
    """
    app: Application
    """
    The per-connection application coroutine with the signature:
        async def app(receive, send)
    It receives decoded lines and may send response lines.
    """

    host: str
    """
    IP address or hostname on which the server listens.
    """

    port: int
    """
    TCP port to bind. If set to 0, the OS selects an available port.
    """

    backlog: int = 128
    """
    Maximum number of pending TCP connections waiting for accept().
    """

    limit_concurrency: int = 1024
    """
    Maximum number of sessions running at once. Further connections
    are accepted but wait for a free slot before their exchange starts.
    """

    max_line_size: int = 64 * 1024  # 64KB
    """
    Maximum number of bytes buffered for a single unterminated line.
    Protects against peers that never send a newline.
    """

    read_timeout: float | None = 30.0
    """
    Deadline (in seconds) for each line read. None disables it.
    """

    write_timeout: float | None = 10.0
    """
    Deadline (in seconds) for a paused transport to become writable again.
    None disables it.
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) allowed for graceful shutdown:
    - in-flight sessions finish their current turn
    - session tasks registered in ServerState.tasks must complete
    After this timeout, remaining tasks are cancelled.
    """

    bind_retries: int = 0
    """
    Number of additional bind attempts, spaced by exponential backoff,
    before start() gives up with BindError.
    """
