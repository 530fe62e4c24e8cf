"""Example: drive the engine directly, without Flask.

Controllers are a thin layer; reconciliation lives in the services behind
``MessEngine``.
"""

import importlib
import logging

from config import get_settings_module

from mess_system.container import build_container
from mess_system.core.enums import BillingPeriod
from mess_system.core.logging_config import setup_logging

logger = logging.getLogger("mess_system.examples")


def main():
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG)
    engine = container.engine

    marked = engine.auto_mark_drinks()
    logger.info("auto-mark: %s", marked.value.message if marked.ok else marked.message)

    billed = engine.generate_bills(BillingPeriod.CURRENT)
    logger.info("billing: %s", billed.value.message if billed.ok else billed.message)


if __name__ == "__main__":
    main()
