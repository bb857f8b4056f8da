from typing import IO

from linectl.core.client import LineClient


def run_compute(client: LineClient, first: int, second: int, stdout: IO[str]) -> list[str]:
    """
    Send both operands, then read and print the two response lines.
    The server closes the connection after answering.
    """
    client.send_line(str(first))
    client.send_line(str(second))

    lines = [client.recv_line() for _ in range(2)]
    for line in lines:
        stdout.write(line + "\n")

    return lines
