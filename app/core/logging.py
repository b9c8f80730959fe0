import logging
import sys

from app.core.config import settings


def setup_logging(level: str = None):
    """
    Send application logs to stdout so the container runtime picks them up.
    Safe to call more than once; the handler is only installed the first time.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())

    if any(getattr(h, "_task_manager", False) for h in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handler._task_manager = True
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
