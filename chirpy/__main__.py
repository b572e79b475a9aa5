"""
Chirpy Entry Point

Allows running the server directly via `python -m chirpy [--debug]`.
Loads a .env file, configures logging and starts the HTTP server.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .core.chirpy_service import ChirpyService
from .core.config import ServerConfig
from .transport.http_transport import HTTPTransport


def setup_logging():
    """Configure logging to stderr"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chirpy", description="Chirpy API server")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Delete the database file before starting",
    )
    return parser.parse_args(argv)


def build_service(config: ServerConfig) -> ChirpyService:
    """
    Build the service, starting from an empty database in debug mode

    Raises:
        OSError: If the debug database file cannot be removed
        StoreIOError: If the database cannot be created or loaded
    """
    logger = logging.getLogger("main")

    if config.debug:
        db_file = Path(config.db_path)
        if db_file.exists():
            db_file.unlink()
            logger.info(f"Debug mode: removed {db_file}")

    return ChirpyService(config)


async def serve(config: ServerConfig):
    """Build the service and serve HTTP until interrupted"""
    logger = logging.getLogger("main")

    try:
        service = build_service(config)
    except Exception as e:
        # Nothing can be served without the store
        logger.critical(f"Failed to initialize: {e}", exc_info=True)
        sys.exit(1)

    transport = HTTPTransport(service, config)
    try:
        await transport.start()
    finally:
        await transport.stop()


def main(argv=None):
    """Main entry point"""
    load_dotenv()
    setup_logging()
    args = parse_args(argv)

    try:
        config = ServerConfig.from_env(debug=args.debug)
    except ValueError as e:
        logging.getLogger("main").critical(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
