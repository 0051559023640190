#!/usr/bin/env python3
"""Script for serving the movie similarity API."""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import argparse
import logging
import structlog
import uvicorn

from moviesim.data.loaders import CatalogError, catalog_loader
from moviesim.service.config import config

# Configure logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

def validate_environment(catalog_path: str = None) -> bool:
    """Check that the configured catalog loads."""
    catalog_path = catalog_path or config.CATALOG_PATH
    logger.info("Validating environment", catalog_path=catalog_path)

    try:
        movies = catalog_loader.load(catalog_path)
    except CatalogError as e:
        logger.error("Catalog validation failed", catalog_path=catalog_path, error=str(e))
        return False

    logger.info("Environment validation completed", catalog_size=len(movies))
    return True

def start_server(host: str = None, port: int = None, reload: bool = False, workers: int = 1):
    """Start the FastAPI server."""
    host = host or config.API_HOST
    port = port or config.API_PORT

    logger.info("Starting movie similarity service",
               host=host,
               port=port,
               reload=reload,
               workers=workers)

    try:
        uvicorn.run(
            "moviesim.service.api:app",
            host=host,
            port=port,
            reload=reload,
            workers=workers if not reload else 1,
            log_level=config.LOG_LEVEL.lower(),
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")

def main(argv=None):
    """Main function."""
    parser = argparse.ArgumentParser(description="Start the movie similarity API")

    parser.add_argument(
        "--host",
        type=str,
        default=config.API_HOST,
        help=f"Host to bind to (default: {config.API_HOST})"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.API_PORT,
        help=f"Port to bind to (default: {config.API_PORT})"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the catalog and exit"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL.upper(), format="%(message)s")

    if args.validate:
        sys.exit(0 if validate_environment() else 1)

    start_server(
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers
    )

if __name__ == "__main__":
    main()
