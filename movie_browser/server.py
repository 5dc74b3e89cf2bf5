"""Web server entry point."""

import logging
import sys

import uvicorn

from movie_browser.config import Config

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )


def main() -> int:
    """Run the web server."""
    # Validate config
    errors = Config.validate()
    if errors:
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        print("\nPlease check your .env file")
        return 1

    setup_logging(Config.LOG_LEVEL)

    logger.info("=" * 50)
    logger.info("Movie Browser - Web Interface")
    logger.info("=" * 50)
    logger.info(f"Starting server on http://localhost:{Config.WEB_PORT}")
    logger.info(f"Discard stale responses: {Config.DISCARD_STALE_RESPONSES}")
    logger.info("=" * 50)

    # Run server
    uvicorn.run(
        "movie_browser.web.app:app",
        host=Config.WEB_HOST,
        port=Config.WEB_PORT,
        reload=False,
        log_level=Config.LOG_LEVEL.lower(),
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
