import logging
from typing import Any, Callable, Mapping

from lineserve.core.transport.application import Application


ApplicationFactory = Callable[[Mapping[str, Any]], Application]


class ExchangeRouter:
    """
    Maps exchange kinds (strings) to factories building the Application
    that serves one connection of that kind.

    Each factory is registered exactly once per kind and receives the
    exchange options (for example the chat prefix) as a mapping. Attempting
    to register a second factory for the same kind raises a RuntimeError.

    The server runs a single exchange kind, chosen at startup; `build()`
    resolves it and instantiates the Application handed to every connection.
    """

    def __init__(self) -> None:
        self._routes: dict[str, ApplicationFactory] = {}
        self._logger = logging.getLogger("core.routing.router")

    def exchange(self, kind: str) -> Callable[[ApplicationFactory], ApplicationFactory]:
        def decorator(func: ApplicationFactory) -> ApplicationFactory:
            if kind in self._routes:
                raise RuntimeError(f"Exchange already registered for '{kind}'")

            self._routes[kind] = func
            return func

        return decorator

    def resolve(self, kind: str) -> ApplicationFactory | None:
        return self._routes.get(kind)

    def routes(self) -> dict[str, ApplicationFactory]:
        return dict(self._routes)

    def build(self, kind: str, options: Mapping[str, Any] | None = None) -> Application:
        factory = self.resolve(kind)
        if factory is None:
            known = ", ".join(sorted(self._routes)) or "none"
            raise LookupError(f"Unknown exchange kind '{kind}' (registered: {known})")

        self._logger.debug(f"Building '{kind}' exchange")
        return factory(options or {})
