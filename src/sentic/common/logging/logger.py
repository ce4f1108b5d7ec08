import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from sentic.common.config.settings import Settings

# === File output path ===
BASE_LOG_DIR = Path(__file__).resolve().parent.parent.parent.parent.parent / "logs"

# === Colors for terminal logs ===
COLOR_MAP = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[95m",  # Magenta
    "ENDC": "\033[0m"
}

LOG_FORMAT = '[%(asctime)s] %(levelname)s | %(message)s | context=%(context)s'


class SafeFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, "context"):
            record.context = {}
        return super().format(record)


class ColorFormatter(SafeFormatter):
    def format(self, record):
        levelname = record.levelname
        color = COLOR_MAP.get(levelname, "")
        endc = COLOR_MAP["ENDC"]
        record.levelname = f"{color}{levelname}{endc}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


# === Create logger ===
logger = logging.getLogger("sentic")
logger.setLevel(logging.DEBUG)
logger.propagate = False

# === Console handler ===
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(ColorFormatter(LOG_FORMAT))
logger.addHandler(console_handler)


def configure_logging(settings: Settings) -> None:
    """Apply environment-dependent level and the optional file handler."""
    logger.setLevel(logging.INFO if settings.is_production else logging.DEBUG)

    if settings.LOG_TO_FILE and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        BASE_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = BASE_LOG_DIR / f"sentic_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(SafeFormatter(LOG_FORMAT))
        logger.addHandler(file_handler)


# === Public Logging Functions ===
def _extra_context(extra: Optional[dict] = None):
    return {"context": extra or {}}


def log_debug(message: str, extra: Optional[dict] = None):
    logger.debug(message, extra=_extra_context(extra))

def log_info(message: str, extra: Optional[dict] = None):
    logger.info(message, extra=_extra_context(extra))

def log_warning(message: str, extra: Optional[dict] = None):
    logger.warning(message, extra=_extra_context(extra))

def log_error(message: str, extra: Optional[dict] = None, exc_info: bool = False):
    logger.error(message, extra=_extra_context(extra), exc_info=exc_info)
