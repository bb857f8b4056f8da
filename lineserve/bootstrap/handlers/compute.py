from typing import Any, Mapping

from lineserve.bootstrap.deps import get_router
from lineserve.core.exchange.compute import ComputeApplication
from lineserve.core.models.exchange import ExchangeKind
from lineserve.core.transport.application import Application


router = get_router()


@router.exchange(ExchangeKind.compute)
def compute(options: Mapping[str, Any]) -> Application:
    return ComputeApplication()
