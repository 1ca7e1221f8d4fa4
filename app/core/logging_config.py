"""Application logging setup: console plus a daily rotating file."""
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from app.config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once; repeated calls replace the handlers."""
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())

    # Clear existing handlers
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(log_dir / "cityinfo.log", when="midnight")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger(__name__).info(f"Logging initialized at level {settings.LOG_LEVEL}")
