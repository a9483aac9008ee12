import logging
import time

LOG_FORMAT = "[%(levelname)s] %(asctime)s | %(module_name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

QUIET_LOGGERS = ("aiohttp.access", "uvicorn.access")

class ModuleNameFilter(logging.Filter):
    """Adds `module_name`, the last part of the logger name, to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.module_name = record.name.rsplit(".", 1)[-1]
        return True

def setup_logging(level: str = "INFO") -> None:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    formatter.converter = time.gmtime

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(ModuleNameFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
