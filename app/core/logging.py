import logging

from app.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging() -> None:
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=_FORMAT)
    # httpx logs every request at INFO; pagination makes that noisy
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
