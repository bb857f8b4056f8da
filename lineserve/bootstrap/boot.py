import logging

from lineserve.bootstrap.config.loader import get_cli_args
from lineserve.bootstrap.deps import get_cp
from lineserve.core.errors import BindError
from lineserve.core.helpers.utils import setup_signal_handler, setup_logging, scan


@scan("lineserve.bootstrap.handlers")
def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)
    logger = logging.getLogger("lineserve.boot")

    controlplane = get_cp()
    loop = controlplane.loop

    try:
        with setup_signal_handler() as stop_event:
            loop.run_until_complete(controlplane.start(stop_event))
    except BindError as ex:
        logger.critical(str(ex))
        raise SystemExit(1)
    except KeyboardInterrupt:
        pass
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        finally:
            loop.close()


if __name__ == "__main__":
    main()
