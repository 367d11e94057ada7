"""
Run the Greenfields site with uvicorn.

Exit status is 0 after a clean shutdown and 1 when the configuration cannot
be loaded or the server fails to start (for example the port is taken).
"""
import logging
import sys

import uvicorn

from greenfields.core.config import get_settings
from greenfields.core.exceptions import ConfigError
from greenfields.core.logging_config import configure_logging
from greenfields.main import create_app

logger = logging.getLogger("greenfields")


def main() -> int:
    try:
        settings = get_settings()
    except ConfigError as e:
        # Logging isn't configured from settings yet
        logging.basicConfig(level=logging.ERROR, format="%(levelname)s %(message)s")
        logger.error(f"Cannot start: {e.message}")
        return 1

    configure_logging(settings.log)

    # uvicorn calls sys.exit with its own status when startup fails;
    # SIGINT/SIGTERM trigger its graceful shutdown
    try:
        uvicorn.run(
            create_app(settings),
            host=settings.server.host,
            port=settings.server.port,
            log_config=None,
            log_level=settings.log.level,
        )
    except SystemExit as e:
        if e.code:
            logger.error(
                f"Server failed to start on {settings.server.host}:{settings.server.port} "
                f"(uvicorn exit status {e.code})"
            )
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
