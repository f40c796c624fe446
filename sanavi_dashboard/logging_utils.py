"""Logging setup shared by the gateway, the state containers and callbacks."""

import logging
import os

_CONFIGURED = False


def configure_root_logger(level=None):
    """Attach one stream handler to the root logger (only once per process)."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    if level is None:
        level = os.environ.get("SANAVI_LOG_LEVEL", "INFO").upper()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
    _CONFIGURED = True


def get_logger(name=None):
    configure_root_logger()
    return logging.getLogger(name)
