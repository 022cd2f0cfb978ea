"""
Run the user service.

Usage:
    python -m user_service

Or with uvicorn directly:
    uvicorn user_service.main:create_application --factory --port 8080
"""
import logging
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from .core.config import get_settings
from .core.logging_config import setup_logging
from .domain.exceptions import ConfigurationError
from .main import create_application

logger = logging.getLogger(__name__)


def main() -> int:
    load_dotenv(Path.cwd() / ".env")
    settings = get_settings()
    setup_logging(settings.log_level)
    
    try:
        settings.validate()
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e.message}")
        return 1
    
    application = create_application(settings)
    logger.info(f"Starting server on http://{settings.app_host}:{settings.app_port}")
    uvicorn.run(
        application,
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
