import asyncio
import logging
import uvicorn

from app.core.config import settings
from app.core.logging import setup_logging
from app.web.server import app as web_app

log = logging.getLogger(__name__)


async def run_web() -> None:
    config = uvicorn.Config(web_app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    server = uvicorn.Server(config)
    await server.serve()


async def main() -> None:
    setup_logging()
    log.info("Serving on %s:%d, upstream %s", settings.host, settings.port, settings.leetcode_base_url)
    await run_web()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
