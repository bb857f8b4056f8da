from typing import Any, Mapping

from lineserve.bootstrap.deps import get_router
from lineserve.core.exchange.chat import ChatApplication
from lineserve.core.exchange.handlers import DEFAULT_PREFIX
from lineserve.core.models.exchange import ExchangeKind
from lineserve.core.transport.application import Application


router = get_router()


@router.exchange(ExchangeKind.chat)
def chat(options: Mapping[str, Any]) -> Application:
    return ChatApplication(prefix=options.get("prefix", DEFAULT_PREFIX))
