"""
inventory.py
Fixed-size grid inventory. Places rectangular items without overlap,
finds free space, moves items around and repacks the grid.
"""
import logging
from collections.abc import Mapping

from gridtext import grid_to_string, is_in_range
from inventory_events import EventHub, InventoryEvent

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    pass


class InvalidDimensionError(InventoryError, ValueError):
    pass


class InvalidSizeError(InventoryError, ValueError):
    pass


class MissingItemError(InventoryError, TypeError):
    pass


class ItemNotFoundError(InventoryError, KeyError):
    pass


def _check_size(w, h):
    if isinstance(w, bool) or isinstance(h, bool):
        raise InvalidSizeError(f"size must be integers, got {w!r}x{h!r}")
    w, h = int(w), int(h)
    if w <= 0 or h <= 0:
        raise InvalidSizeError(f"size must be positive, got {w}x{h}")
    return w, h


def item_size(item):
    # items are either objects exposing size or w,h, or plain dicts with optional 'w'/'h'
    if isinstance(item, dict):
        w, h = item.get('w', 1), item.get('h', 1)
    elif hasattr(item, 'size'):
        w, h = item.size
    elif hasattr(item, 'w') and hasattr(item, 'h'):
        w, h = item.w, item.h
    else:
        raise InvalidSizeError(f"{item!r} has no size")
    return _check_size(w, h)


def item_name(item):
    if isinstance(item, dict):
        return item.get('name')
    return getattr(item, 'name', None)


def _is_position(value):
    return (
        isinstance(value, (tuple, list)) and len(value) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    )


def _xy(x, y):
    # coordinates come either as x, y or as a single (x, y) position
    if y is None:
        x, y = x
    return x, y


class GridInventory:
    """A width x height grid of cells, each empty or covered by exactly one item.

    Every placed item is tracked by a placement entry
    ``{'item', 'x', 'y', 'w', 'h'}`` with (x, y) its top-left anchor. The grid
    (``grid[y][x]``) stores a reference to the entry for every covered cell and
    the placement index maps ``id(item)`` to the same entry; both are updated
    together by every mutating method.

    Expected failures (no room, occupied cell, unknown item) come back as
    False / None. Programming errors (bad dimensions, non-positive item size,
    None where an item is required) raise InventoryError subclasses.
    """

    def __init__(self, width, height, items=None):
        for label, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionError(f"{label} must be a positive integer, got {value!r}")
        self._width = width
        self._height = height
        self._grid = self._new_grid()
        self._placements = {}
        self._events = EventHub()
        if items is not None:
            self._seed(items)

    def _new_grid(self):
        return [[None for _ in range(self._width)] for _ in range(self._height)]

    def _seed(self, items):
        entries = items.items() if isinstance(items, Mapping) else items
        for entry in entries:
            if isinstance(entry, (tuple, list)) and len(entry) == 2 and not _is_position(entry[0]):
                # (item, position) pair; a malformed position just fails to place
                item, position = entry
                placed = _is_position(position) and self.place(item, position)
            else:
                item = entry
                placed = self.place_anywhere(item)
            if not placed:
                logger.debug("skipping initial item %r: duplicate, bad position or no room", item)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def count(self):
        return len(self._placements)

    # --- observers ---

    def subscribe(self, event, callback):
        self._events.subscribe(event, callback)

    def unsubscribe(self, event, callback):
        return self._events.unsubscribe(event, callback)

    # --- internal helpers ---

    def _entry(self, item):
        if item is None:
            return None
        entry = self._placements.get(id(item))
        if entry is None or entry['item'] is not item:
            return None
        return entry

    def _on_grid(self, x, y):
        return _is_position((x, y)) and is_in_range(x, 0, self._width - 1) and is_in_range(y, 0, self._height - 1)

    def _fits(self, x, y, w, h):
        return _is_position((x, y)) and is_in_range(x, 0, self._width - w) and is_in_range(y, 0, self._height - h)

    def _area_is_empty(self, x, y, w, h, ignore=None):
        for yy in range(y, y + h):
            for xx in range(x, x + w):
                cell = self._grid[yy][xx]
                if cell is not None and cell is not ignore:
                    return False
        return True

    @staticmethod
    def _cells(entry):
        for y in range(entry['y'], entry['y'] + entry['h']):
            for x in range(entry['x'], entry['x'] + entry['w']):
                yield x, y

    def _stamp(self, entry, value):
        for x, y in self._cells(entry):
            self._grid[y][x] = value

    # --- placement ---

    def can_place(self, item, x, y=None):
        """True if item can go with its top-left corner at (x, y).

        Coordinates may be passed as x, y or as one (x, y) tuple; the same holds
        for every method taking a cell.
        """
        x, y = _xy(x, y)
        if item is None:
            return False
        w, h = item_size(item)
        if self.contains(item):
            return False
        if not self._fits(x, y, w, h):
            return False
        return self._area_is_empty(x, y, w, h)

    def place(self, item, x, y=None):
        x, y = _xy(x, y)
        if not self.can_place(item, x, y):
            return False
        w, h = item_size(item)
        entry = {'item': item, 'x': x, 'y': y, 'w': w, 'h': h}
        # mark grid
        self._stamp(entry, entry)
        self._placements[id(item)] = entry
        logger.debug("placed %r at (%d, %d)", item, x, y)
        self._events.emit(InventoryEvent.ADDED, item, (x, y))
        return True

    def can_place_anywhere(self, item):
        if item is None or self.contains(item):
            return False
        return self.find_free_position(item_size(item)) is not None

    def place_anywhere(self, item):
        if item is None or self.contains(item):
            return False
        position = self.find_free_position(item_size(item))
        if position is None:
            return False
        return self.place(item, *position)

    def find_free_position(self, size):
        """First anchor, scanning rows top to bottom and each row left to right,
        where an item of the given (w, h) fits. None if there is no such anchor.
        """
        w, h = _check_size(*size)
        if w > self._width or h > self._height:
            return None
        for y in range(self._height - h + 1):
            for x in range(self._width - w + 1):
                if self._area_is_empty(x, y, w, h):
                    return (x, y)
        return None

    # --- queries ---

    def contains(self, item):
        return self._entry(item) is not None

    def is_free(self, x, y=None):
        x, y = _xy(x, y)
        # out of bounds counts as not free
        if not self._on_grid(x, y):
            return False
        return self._grid[y][x] is None

    def is_occupied(self, x, y=None):
        return not self.is_free(x, y)

    def find_item_at(self, x, y=None):
        x, y = _xy(x, y)
        if not self._on_grid(x, y):
            return None
        entry = self._grid[y][x]
        if entry is None:
            return None
        return entry['item']

    def get_item_at(self, x, y=None):
        x, y = _xy(x, y)
        item = self.find_item_at(x, y)
        if item is None:
            raise ItemNotFoundError(f"no item at ({x}, {y})")
        return item

    def find_position(self, item):
        entry = self._entry(item)
        if entry is None:
            return None
        return (entry['x'], entry['y'])

    def get_position(self, item):
        if item is None:
            raise MissingItemError("item must not be None")
        position = self.find_position(item)
        if position is None:
            raise ItemNotFoundError(f"{item!r} is not in the inventory")
        return position

    def find_footprint(self, item):
        entry = self._entry(item)
        if entry is None:
            return None
        return list(self._cells(entry))

    def get_footprint(self, item):
        """Cells covered by item, row by row. Raises if the item is not placed."""
        if item is None:
            raise MissingItemError("item must not be None")
        footprint = self.find_footprint(item)
        if footprint is None:
            raise ItemNotFoundError(f"{item!r} is not in the inventory")
        return footprint

    def count_by_name(self, name):
        return sum(1 for e in self._placements.values() if item_name(e['item']) == name)

    # --- removal ---

    def remove_with_position(self, item):
        """Remove item and return the anchor it had, or None if it was not placed."""
        entry = self._entry(item)
        if entry is None:
            return None
        self._stamp(entry, None)
        del self._placements[id(item)]
        position = (entry['x'], entry['y'])
        logger.debug("removed %r from (%d, %d)", item, *position)
        self._events.emit(InventoryEvent.REMOVED, item, position)
        return position

    def remove(self, item):
        return self.remove_with_position(item) is not None

    def remove_at(self, x, y=None):
        item = self.find_item_at(x, y)
        if item is None:
            return None
        self.remove(item)
        return item

    def clear(self):
        if not self._placements:
            return
        self._grid = self._new_grid()
        self._placements = {}
        logger.debug("cleared %dx%d inventory", self._width, self._height)
        self._events.emit(InventoryEvent.CLEARED)

    # --- relocation ---

    def move_item(self, item, x, y=None):
        x, y = _xy(x, y)
        entry = self._entry(item)
        if entry is None:
            return False
        w, h = entry['w'], entry['h']
        # validate everything before touching the grid; the item's own cells don't block it
        if not self._fits(x, y, w, h) or not self._area_is_empty(x, y, w, h, ignore=entry):
            return False
        self._stamp(entry, None)
        entry['x'], entry['y'] = x, y
        self._stamp(entry, entry)
        logger.debug("moved %r to (%d, %d)", item, x, y)
        self._events.emit(InventoryEvent.MOVED, item, (x, y))
        return True

    def reorganize_space(self):
        """Repack every item, biggest first, using the same first-fit search as
        place_anywhere.

        Items are ordered by area, then by their longer side, both descending;
        ties keep their current order. Items whose anchor changed are announced
        as MOVED. An item that no longer fits is removed, announced as REMOVED
        and returned so the caller can deal with it.
        ADDED is never emitted here: surviving items stay in the inventory the
        whole time, only their anchors change.
        """
        entries = sorted(
            self._placements.values(),
            key=lambda e: (e['w'] * e['h'], max(e['w'], e['h'])),
            reverse=True,
        )
        old_positions = {id(e['item']): (e['x'], e['y']) for e in entries}

        self._grid = self._new_grid()
        self._placements = {}
        moved = []
        dropped = []
        for entry in entries:
            position = self.find_free_position((entry['w'], entry['h']))
            if position is None:
                dropped.append(entry)
                continue
            entry['x'], entry['y'] = position
            self._stamp(entry, entry)
            self._placements[id(entry['item'])] = entry
            if position != old_positions[id(entry['item'])]:
                moved.append(entry)

        # notify once the layout is final so observers never see a half-packed grid
        for entry in moved:
            self._events.emit(InventoryEvent.MOVED, entry['item'], (entry['x'], entry['y']))
        for entry in dropped:
            old = old_positions[id(entry['item'])]
            logger.warning("reorganize dropped %r: no room left (was at %s)", entry['item'], old)
            self._events.emit(InventoryEvent.REMOVED, entry['item'], old)
        logger.debug("reorganized %d item(s), %d moved, %d dropped", len(entries), len(moved), len(dropped))
        return [e['item'] for e in dropped]

    # --- snapshots & iteration ---

    def copy_grid_to(self, matrix):
        if len(matrix) != self._height or any(len(row) != self._width for row in matrix):
            raise InvalidDimensionError(
                f"matrix must be {self._height} rows of {self._width} cells"
            )
        for y, row in enumerate(self._grid):
            for x, entry in enumerate(row):
                matrix[y][x] = None if entry is None else entry['item']

    def snapshot(self):
        matrix = [[None] * self._width for _ in range(self._height)]
        self.copy_grid_to(matrix)
        return matrix

    def iter_items(self):
        # yield (item, x, y, w, h)
        for e in list(self._placements.values()):
            yield e['item'], e['x'], e['y'], e['w'], e['h']

    def __iter__(self):
        for e in list(self._placements.values()):
            yield e['item']

    def __len__(self):
        return len(self._placements)

    def __contains__(self, item):
        return self.contains(item)

    def __str__(self):
        return grid_to_string(self.snapshot())

    def __repr__(self):
        return f"GridInventory({self._width}x{self._height}, {len(self._placements)} items)"
