from __future__ import annotations
import logging
import os

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(message)s"


def configure_logging(level: str = None) -> None:
    level_name = (level or os.getenv("BUDGET_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
