"""HTTP application entry point for famlyeml."""

from fastapi import FastAPI
from loguru import logger

from famlyeml.api import create_api_router
from famlyeml.config import get_config
from famlyeml.log_setup import setup_logging
from famlyeml.version import VERSION


def create_app() -> FastAPI:
    """Build the FastAPI application with the API routes mounted."""
    app = FastAPI(title="famlyeml", version=VERSION)
    app.include_router(create_api_router())
    logger.info("REST API endpoints configured")
    return app


def main() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    config = get_config()
    setup_logging(config)
    logger.info(f"Starting famlyeml API on {config.api_host}:{config.api_port}")
    uvicorn.run(create_app(), host=config.api_host, port=config.api_port)


if __name__ == "__main__":
    main()
