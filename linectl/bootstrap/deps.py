import argparse

from linectl.core.client import LineClient
from linectl.core.loader import LineConfLoader
from linectl.core.utils import parse_timeout, resolve_context
from lineserve.core.models.endpoint import Endpoint


def get_client(args: argparse.Namespace) -> LineClient:
    conf = LineConfLoader(args.lineconf).load()
    _, ctx = resolve_context(conf, args.context, args.server)

    return LineClient(
        endpoint=Endpoint.parse(ctx.server),
        timeout=parse_timeout(ctx.timeout),
    )
