import logging
import sys

from taskboard.core.config import settings

LOG_FORMAT = "[task-board] %(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = None) -> None:
    # un seul handler sur stderr, partagé avec uvicorn
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
