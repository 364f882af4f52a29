"""Main entry point for the skill-sharing server."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from skillshare import Application
from skillshare.api import create_fastapi_app
from skillshare.config import resolve_shutdown_timeout
from skillshare.logging_config import setup_logging


def main():
    """Run the server."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))
    shutdown_timeout = resolve_shutdown_timeout(os.getenv("SHUTDOWN_TIMEOUT"))

    # POLL_TIMEOUT and PUBLIC_DIR are read from the environment
    app = create_fastapi_app(Application())

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
        log_config=None,
        # Held long polls would otherwise delay shutdown by up to POLL_TIMEOUT
        timeout_graceful_shutdown=shutdown_timeout,
    )


if __name__ == "__main__":
    main()
