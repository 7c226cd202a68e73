"""VitaReach - telemedicine booking backend."""

import sys

import uvicorn
from pydantic import ValidationError

from app.config import get_settings
from app.core.logging import logger, setup_logging
from app.main import create_app
from app.shared.exceptions import ConfigError


def main():
    """Load configuration, build the app and serve it."""
    setup_logging()

    try:
        settings = get_settings()
        app = create_app(settings)
    except ValidationError as e:
        missing = ", ".join(str(error["loc"][0]) for error in e.errors())
        logger.critical(f"Invalid configuration: {missing}")
        sys.exit(1)
    except ConfigError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"Serving {settings.APP_NAME} on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
