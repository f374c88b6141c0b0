import sys
from loguru import logger

CONSOLE_FORMAT = "{time} | {level} | {module}:{function}:{line} | {message}"
# bound context (link_id, name, token, ...) only goes to the file
FILE_FORMAT = CONSOLE_FORMAT + " | {extra}"


def setup_logging(level: str, log_path: str) -> None:
    logger.remove()
    logger.configure(extra={})
    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
    )
    logger.add(
        log_path,
        level="DEBUG",
        format=FILE_FORMAT,
        rotation="100 KB",
        compression="zip",
    )
