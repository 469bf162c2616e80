#!/usr/bin/env python3
"""
Message board server
Serves the thread and reply API with uvicorn
"""
import logging
import sys
import uvicorn
from config import DEFAULT_HOST, DEFAULT_PORT, LOG_LEVEL, DB_PATH

logger = logging.getLogger("messageboard")


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def main():
    setup_logging()
    logger.info("Starting message board server on %s:%s (database: %s)", DEFAULT_HOST, DEFAULT_PORT, DB_PATH)

    try:
        # Import here so logging is configured before the app is built
        from app import app

        uvicorn.run(
            app,
            host=DEFAULT_HOST,
            port=DEFAULT_PORT,
            reload=False,
            access_log=True,
            log_config=None,
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Error starting server")
        sys.exit(1)

if __name__ == "__main__":
    main()
