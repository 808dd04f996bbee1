from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # botocore logs every request at DEBUG; keep it out of application logs.
    logging.getLogger("botocore").setLevel(max(log_level, logging.INFO))
