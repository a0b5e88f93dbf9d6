"""
Main entrypoint: run the CountData API with uvicorn.

Env: API_KEY, DATABASE_URL, DB_SSL_CA_PATH, DB_SSL_MODE, API_HOST, API_PORT,
CREATE_TABLE_ON_STARTUP, LOG_LEVEL, LOG_FORMAT (a .env file at the root is read too).
"""

import uvicorn

# Configure structured JSON logging before other imports that may log
from countdata.count_logging import get_logger
from countdata.config import get_settings

logger = get_logger("main")


def main() -> None:
    settings = get_settings()

    from countdata.api_server.app import app

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
