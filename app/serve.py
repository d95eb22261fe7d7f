"""
Run the API with uvicorn. From project root:
  python -m app.serve
or, once installed:
  snippet-board
Host and port come from HOST / PORT (env or .env).
"""
import logging
import sys

import uvicorn

from app.core.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    logger.info("Serving on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
