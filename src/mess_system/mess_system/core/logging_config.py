"""Logging setup shared by the Flask app and the maintenance scripts."""

import logging
import sys


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger to write to stdout.

    Args:
        level: Logging level (``logging.INFO``, ``"DEBUG"``...).
    """
    log_format = "%(asctime)s - [%(levelname)s] - %(name)s - (%(filename)s).%(funcName)s(%(lineno)d) - %(message)s"

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(log_format))

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, handlers=[stdout_handler], force=True)

    # mysql-connector and werkzeug are chatty at INFO
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
