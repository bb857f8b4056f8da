import json
from functools import lru_cache

from pydantic import ValidationError

from lineserve.bootstrap.config.settings import LineServeConfig
from lineserve.core.controlplane import ControlPlane
from lineserve.core.routing.router import ExchangeRouter


@lru_cache
def get_cp() -> ControlPlane:
    config = get_config()

    try:
        return ControlPlane(config=config, router=get_router())
    except LookupError as ex:
        raise SystemExit(f"Invalid exchange configuration: {ex}")


@lru_cache
def get_router() -> ExchangeRouter:
    return ExchangeRouter()


@lru_cache
def get_config() -> LineServeConfig:
    try:
        return LineServeConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
