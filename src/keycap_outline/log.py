from __future__ import annotations

import logging

_LOGGER_CONFIGURED = False


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a console handler to the package logger.

    Safe to call more than once; only the first call has an effect. The library
    itself never calls this.
    """
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    logger = logging.getLogger("keycap_outline")
    logger.setLevel(level)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(fmt)
    logger.addHandler(handler)

    _LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
