import asyncio


def get_remote_addr(transport: asyncio.BaseTransport) -> tuple[str, int] | None:
    info = transport.get_extra_info("peername")
    if isinstance(info, (list, tuple)) and len(info) >= 2:
        return str(info[0]), int(info[1])
    return None
