"""
inventory_config.py
Default sizes and logging settings for grid inventories.
"""
import logging
import os

# Grid sizes as (width, height)
PLAYER_INVENTORY_SIZE = (6, 3)
CHEST_INVENTORY_SIZE = (4, 3)

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)s: %(message)s"
LOG_LEVEL = os.environ.get("GRID_INVENTORY_LOG_LEVEL", "INFO").upper()


def configure_logging(level=None):
    """Attach a console handler to the root logger (scripts only, never on import)."""
    root = logging.getLogger()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level or LOG_LEVEL)
    return handler
