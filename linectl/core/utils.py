import sys

from linectl.core.model import LineConf, ContextConfig, DEFAULT_SERVER


def parse_timeout(s: str) -> float | None:
    # Very simple parser: supports "<number>s", "<number>ms" or a bare number of seconds.
    # An empty string or "0" means no timeout.
    s = s.strip().lower()
    if not s:
        return None
    if s.endswith("ms"):
        value = float(s[:-2]) / 1000.0
    elif s.endswith("s"):
        value = float(s[:-1])
    else:
        value = float(s)
    return value or None


def resolve_context(
    conf: LineConf,
    context_override: str | None,
    server_override: str | None
) -> tuple[str, ContextConfig]:
    ctx_name = context_override or conf.current_context
    if ctx_name not in conf.contexts:
        print(f"Warning: unknown context '{ctx_name}', using fallback context.", file=sys.stderr)
        fallback = ContextConfig(server=server_override or DEFAULT_SERVER)
        return "", fallback

    ctx = conf.contexts[ctx_name]
    if server_override:
        ctx = ContextConfig(
            server=server_override,
            timeout=ctx.timeout,
        )

    return ctx_name, ctx
