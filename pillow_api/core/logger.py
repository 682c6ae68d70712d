# pillow_api/core/logger.py
import logging
import os
from typing import Protocol, runtime_checkable

from dotenv import load_dotenv

# charge immédiatement le .env
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@runtime_checkable
class InfoLogger(Protocol):
    """Seule capacité exigée d'un logger injecté dans le client."""

    def info(self, msg: str) -> None:
        ...


def get_logger(name: str) -> logging.Logger:
    """
    Configure un logger standardisé avec un niveau selon l'environnement.
    PILLOW_LOG_LEVEL est prioritaire sur LOG_LEVEL.
    """
    log_level = (os.getenv("PILLOW_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()

    logger = logging.getLogger(name)
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(log_level)

        logger.debug("Logger initialized for '%s' with level=%s", name, log_level)
    return logger
