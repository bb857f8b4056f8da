from dataclasses import dataclass

DEFAULT_SERVER = "localhost:12345"
DEFAULT_TIMEOUT = "5s"


@dataclass
class ContextConfig:
    server: str
    timeout: str = DEFAULT_TIMEOUT


@dataclass
class LineConf:
    current_context: str
    contexts: dict[str, ContextConfig]

    @staticmethod
    def default() -> "LineConf":
        return LineConf(
            current_context="local",
            contexts={"local": ContextConfig(server=DEFAULT_SERVER)},
        )

    @staticmethod
    def from_dict(data: dict) -> "LineConf":
        contexts = {}
        for name, ctx in data.get("contexts", {}).items():
            contexts[name] = ContextConfig(
                server=ctx["server"],
                timeout=str(ctx.get("timeout", DEFAULT_TIMEOUT)),
            )
        return LineConf(
            current_context=data["current-context"],
            contexts=contexts,
        )
