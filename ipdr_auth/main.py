from __future__ import annotations

from ipdr_auth.api import create_app
from ipdr_auth.config import load_settings
from ipdr_auth.logging import configure_logging, get_logger

logger = get_logger("main")


def main() -> None:
    configure_logging()
    settings = load_settings()
    app = create_app(settings)
    logger.info("Server running on port %s", settings.port)
    logger.info("Health check available at: http://localhost:%s/api/health", settings.port)
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
