"""Species catalog web application entry point."""

import logging
import os

import uvicorn

from speciescatalog.config import ConfigManager
from speciescatalog.system.structlog_configurator import configure_structlog
from speciescatalog.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config_manager = ConfigManager()
config = config_manager.load()
configure_structlog(config)

# The request logging middleware replaces uvicorn's access log
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.disabled = True

uvicorn_error_logger = logging.getLogger("uvicorn.error")
uvicorn_error_logger.setLevel(logging.INFO)

app = create_app()


def main() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        app,
        host=os.getenv("SPECIESCATALOG_HOST", "0.0.0.0"),  # nosemgrep
        port=int(os.getenv("SPECIESCATALOG_PORT", "8000")),
        access_log=False,
    )


if __name__ == "__main__":
    main()
