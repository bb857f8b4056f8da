import asyncio
import contextlib
import functools
import importlib
import logging
import pkgutil
import signal
import sys
import threading
from collections.abc import Callable, Iterable, Iterator
from types import FrameType

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s"

SHUTDOWN_SIGNALS: tuple[int, ...] = (signal.SIGINT, signal.SIGTERM)

if sys.platform == "win32":
    SHUTDOWN_SIGNALS += (signal.SIGBREAK,)


@contextlib.contextmanager
def setup_signal_handler(signals: Iterable[int] = SHUTDOWN_SIGNALS) -> Iterator[asyncio.Event]:
    """
    Turn shutdown signals into a stop event for the duration of the block,
    so the server can drain its sessions instead of dying mid-response.

    Previous handlers are restored on exit. Each captured signal is then
    delivered once more to its previous handler if that handler is Python
    code (SIGINT raises KeyboardInterrupt again). OS dispositions such as
    SIG_DFL are not re-triggered: a server stopped by SIGTERM exits with
    status 0 once drained.

    Outside the main thread signals cannot be trapped; the event is then
    only set by whoever else holds it.
    """
    stop_event = asyncio.Event()

    if threading.current_thread() is not threading.main_thread():
        yield stop_event
        return

    received: list[int] = []

    def request_stop(sig: int, frame: FrameType | None) -> None:
        received.append(sig)
        stop_event.set()

    previous = {sig: signal.signal(sig, request_stop) for sig in signals}

    try:
        yield stop_event
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

        for sig in dict.fromkeys(reversed(received)):
            if callable(previous[sig]):
                signal.raise_signal(sig)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def import_submodules(package: str) -> list[str]:
    """Import every direct submodule of `package`; returns their names."""
    py_package = importlib.import_module(package)
    names = [f"{package}.{info.name}" for info in pkgutil.iter_modules(py_package.__path__)]

    for name in names:
        importlib.import_module(name)

    return names


def scan(*packages: str):
    """
    Decorator importing the modules of `packages` before the decorated
    function runs. Exchange modules register themselves on the router when
    imported, so this is what makes them available to the entry point.
    """
    def decorator(func: Callable):

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for package in packages:
                import_submodules(package)
            return func(*args, **kwargs)

        return wrapper

    return decorator
