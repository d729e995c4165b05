from __future__ import annotations

import logging
import sys
from typing import Union

_HANDLER_NAME = "tracker-console"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a single stderr handler.

    Streamlit re-executes the page script on every interaction, so this is
    called many times per process. The handler is tagged by name and only
    added once; later calls just adjust the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # SQLAlchemy's own logger is only interesting when echo is requested.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
