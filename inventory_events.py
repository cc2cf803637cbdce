"""
inventory_events.py
Notification kinds emitted by GridInventory and a small observer registry.
"""
import enum
import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class InventoryEvent(enum.Enum):
    ADDED = "added"        # callback(item, (x, y))
    REMOVED = "removed"    # callback(item, (x, y)) with the last position
    MOVED = "moved"        # callback(item, (x, y)) with the new position
    CLEARED = "cleared"    # callback()


class EventHub:
    """Holds callbacks per event kind and calls them synchronously in registration order.

    Exceptions raised by a callback are not caught here; they reach whoever
    triggered the notification.
    """

    def __init__(self):
        self._listeners: Dict[InventoryEvent, List[Callable]] = {kind: [] for kind in InventoryEvent}

    def subscribe(self, kind: InventoryEvent, callback: Callable) -> None:
        if not callable(callback):
            raise TypeError(f"callback for {kind} must be callable, got {callback!r}")
        self._listeners[InventoryEvent(kind)].append(callback)

    def unsubscribe(self, kind: InventoryEvent, callback: Callable) -> bool:
        listeners = self._listeners[InventoryEvent(kind)]
        try:
            listeners.remove(callback)
        except ValueError:
            return False
        return True

    def listeners(self, kind: InventoryEvent) -> List[Callable]:
        return list(self._listeners[InventoryEvent(kind)])

    def emit(self, kind: InventoryEvent, *args) -> None:
        # iterate over a copy so callbacks may (un)subscribe while being notified
        listeners = list(self._listeners[kind])
        logger.debug("emit %s to %d listener(s)", kind.value, len(listeners))
        for callback in listeners:
            callback(*args)
