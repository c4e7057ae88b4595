"""Loguru setup.

Standard library loggers (uvicorn, httpx, sqlalchemy) are routed through an
intercept handler so everything ends up in the same sink.
"""

import logging
import sys

from loguru import logger


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # walk back to the frame that called into `logging`
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO", json: bool = False) -> None:
    logger.remove()
    if json:
        logger.add(sys.stdout, level=level.upper(), serialize=True,
                   backtrace=True, diagnose=False)
    else:
        logger.add(
            sys.stdout,
            level=level.upper(),
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
            ),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    logger.configure(extra={"name": "-"})

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str):
    return logger.bind(name=name)
