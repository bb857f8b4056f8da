class LineServeError(Exception):
    """Base class for every error raised by lineserve and linectl."""


class BindError(LineServeError):
    """The listening endpoint could not be bound (port in use, permission)."""


class ConnectFailed(LineServeError):
    """The client could not establish a connection to the server."""


class ConnectionRefused(ConnectFailed):
    pass


class HostUnreachable(ConnectFailed):
    """DNS resolution failed, the host is unreachable, or connect timed out."""


class EndOfStream(LineServeError):
    """The peer closed the connection before a complete line arrived."""


class MalformedRequest(LineServeError):
    """A received line does not parse as the type the exchange expects."""


class SessionTimeout(LineServeError):
    """No progress was made on a read or write within the configured deadline."""


class LineTooLong(LineServeError):
    """An unterminated line grew past the configured maximum size."""
