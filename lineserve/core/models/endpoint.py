from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoint:
    """
    A (host, port) pair identifying where a server listens or where a
    client connects. Immutable once constructed.
    """
    host: str

    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Port out of range: {self.port}")

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @classmethod
    def parse(cls, address: str) -> "Endpoint":
        """
        Build an Endpoint from ``host:port`` (or ``[v6addr]:port``).
        """
        address = address.strip()
        if address.startswith("["):
            host, sep, rest = address[1:].partition("]")
            if not sep or not rest.startswith(":"):
                raise ValueError(f"Invalid address: {address!r}")
            port_str = rest[1:]
        else:
            host, sep, port_str = address.rpartition(":")
            if not sep:
                raise ValueError(f"Invalid address, expected host:port: {address!r}")

        if not host:
            raise ValueError(f"Invalid address, missing host: {address!r}")

        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"Invalid port in address: {address!r}") from None

        return cls(host=host, port=port)
