import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from glconn import __version__
from glconn.api.endpoints import router as api_router
from glconn.core.config import Config, validate_all
from glconn.core.connection.service import ConnectionConfigService
from glconn.core.logging import configure_root_logging

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    service: ConnectionConfigService | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    The connection service is loaded once at startup and lives on
    ``app.state.connection_service`` for the lifetime of the process.
    """
    config = config or Config.load()
    service = service or ConnectionConfigService.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        service.load()
        yield

    app = FastAPI(title="GitLab Connections", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.connection_service = service
    app.include_router(api_router)
    return app


def main() -> None:
    errors = validate_all()
    if errors:
        configure_root_logging()
        for error in errors:
            logger.error("Configuration error: %s", error)
        sys.exit(1)

    config = Config.load()
    configure_root_logging(config.log_level)

    logger.info("GitLab Connections v%s", __version__)
    logger.info("Connections file: %s", config.connections_file)
    logger.info("Credentials file: %s", config.credentials_file)
    logger.info("Admin API key: %s", config.admin_api_key_hash)

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=config.log_level == "DEBUG",
    )


if __name__ == "__main__":
    main()
