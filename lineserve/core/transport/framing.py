from lineserve.core.errors import LineTooLong

DELIMITER = b"\n"
ENCODING = "utf-8"


def encode_line(text: str) -> bytes:
    """Encode one text record, terminated by the line delimiter."""
    if "\n" in text:
        raise ValueError("A line must not contain a newline character")
    return text.encode(ENCODING) + DELIMITER


def decode_line(raw: bytes) -> str:
    """Decode one record whose delimiter was already removed."""
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode(ENCODING, errors="replace")


class LineBuffer:
    """
    Incremental splitter turning a byte stream into newline-terminated
    text records.

    Bytes are accumulated until a delimiter is seen; every complete record
    is decoded and returned by `feed()`, with its trailing `\\n` (and a
    preceding `\\r`, if any) removed. Bytes that do not yet form a complete
    record stay buffered for the next call. When the stream ends, whatever
    remains buffered is a partial record and is simply dropped with the
    buffer.

    With a `limit`, at most that many records are returned and the rest stay
    buffered; `feed()` with no data then picks up where the last call
    stopped.

    A record longer than `max_line_size` bytes, complete or not, raises
    LineTooLong. The buffer is then in an undefined state and the connection
    it belongs to is expected to be closed.
    """
    def __init__(self, max_line_size: int = 64 * 1024) -> None:
        self._max_line_size = max_line_size
        self._buffer = bytearray()

    @property
    def pending(self) -> int:
        return len(self._buffer)

    @property
    def has_line(self) -> bool:
        return DELIMITER in self._buffer

    def feed(self, data: bytes = b"", limit: int | None = None) -> list[str]:
        self._buffer.extend(data)
        lines: list[str] = []

        while limit is None or len(lines) < limit:
            index = self._buffer.find(DELIMITER)
            if index < 0:
                if len(self._buffer) > self._max_line_size:
                    raise LineTooLong(
                        f"Unterminated line of {len(self._buffer)} bytes exceeds {self._max_line_size}"
                    )
                break

            if index > self._max_line_size:
                raise LineTooLong(f"Line of {index} bytes exceeds {self._max_line_size}")

            raw = bytes(self._buffer[:index])
            del self._buffer[:index + 1]
            lines.append(decode_line(raw))

        return lines

    def clear(self) -> None:
        self._buffer.clear()
