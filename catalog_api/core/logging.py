import logging
from pathlib import Path
import sys

from .config import BASE_DIR, Settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# RequestContextMiddleware writes one line per request to catalog_api.access,
# so uvicorn's own access log only repeats it.
QUIETED_LOGGERS = ("uvicorn.access",)


def _resolve_log_file(log_file_path: str) -> Path:
    log_path = Path(log_file_path)
    if not log_path.is_absolute():
        log_path = BASE_DIR / log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return log_path


def configure_logging(settings: Settings) -> None:
    """Set up root handlers once and tune the catalog's named loggers.

    Root handlers are installed by the first call only; logger levels are
    applied on every call so a second app instance can change them.
    """

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE_PATH:
        handlers.append(logging.FileHandler(_resolve_log_file(settings.LOG_FILE_PATH), encoding="utf-8"))
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT, handlers=handlers)

    logging.getLogger("catalog_api").setLevel(settings.LOG_LEVEL)
    for name in QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # SQL statements go through the root handlers instead of echo's own handler
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DATABASE_ECHO else logging.WARNING
    )
