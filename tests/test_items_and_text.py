import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

import inventory_config
import items
from gridtext import grid_to_string, is_in_range
from inventory import GridInventory


def test_is_in_range_is_inclusive():
    assert is_in_range(0, 0, 3)
    assert is_in_range(3, 0, 3)
    assert not is_in_range(-1, 0, 3)
    assert not is_in_range(4, 0, 3)
    assert not is_in_range(0, 0, -1)


def test_grid_to_string():
    rifle = items.long_rifle()
    matrix = [[rifle, None], [None, "x"]]
    assert grid_to_string(matrix) == "[Long Rifle][]\n[][x]"
    assert grid_to_string([]) == ""


def test_item_size_is_read_only():
    plate = items.armor_plate()
    assert plate.size == (2, 2)
    assert plate.area == 4
    with pytest.raises(AttributeError):
        plate.size = (1, 1)
    with pytest.raises(AttributeError):
        plate.w = 3


def test_item_text_forms():
    heal = items.med_heal()
    assert str(heal) == "Med Heal"
    assert "1x2" in repr(heal)
    assert heal.to_dict()["h"] == 2
    assert heal.description == "Tall healing flask"
    assert items.battery_boost().to_dict()["description"] == "Wide battery pack"


def test_factories_fit_player_inventory():
    inv = GridInventory(*inventory_config.PLAYER_INVENTORY_SIZE)
    loot = [items.small_heal(), items.med_heal(), items.battery_boost(), items.armor_plate(), items.long_rifle()]
    assert all(inv.place_anywhere(it) for it in loot)
    assert inv.count_by_name("Long Rifle") == 1


def test_configure_logging_attaches_handler():
    root = logging.getLogger()
    old_level = root.level
    handler = inventory_config.configure_logging("DEBUG")
    try:
        assert handler in root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.removeHandler(handler)
        root.setLevel(old_level)


def test_log_level_follows_environment(monkeypatch):
    import importlib

    monkeypatch.setenv("GRID_INVENTORY_LOG_LEVEL", "warning")
    try:
        assert importlib.reload(inventory_config).LOG_LEVEL == "WARNING"
    finally:
        monkeypatch.delenv("GRID_INVENTORY_LOG_LEVEL")
        importlib.reload(inventory_config)
