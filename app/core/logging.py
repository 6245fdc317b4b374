import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)
    # SQL echo is controlled by the engine, keep the sqlalchemy logger quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
