"""Non-graphical smoke test for the grid inventory.
This script builds a couple of inventories, shuffles items around and checks
that grid and placement index stay consistent. Run it directly: python smoke_test.py
"""
import items
from inventory import GridInventory
from inventory_config import CHEST_INVENTORY_SIZE, PLAYER_INVENTORY_SIZE, configure_logging
from inventory_events import InventoryEvent


def check_consistency(inv):
    # every occupied cell belongs to exactly the item whose footprint covers it
    covered = {}
    for item, x, y, w, h in inv.iter_items():
        for cell in inv.get_footprint(item):
            assert cell not in covered, f"cell {cell} covered twice"
            covered[cell] = item
    for y in range(inv.height):
        for x in range(inv.width):
            assert inv.find_item_at(x, y) is covered.get((x, y)), f"grid mismatch at {(x, y)}"


def main():
    configure_logging()
    print("Starting smoke test")

    events = []
    player_inv = GridInventory(*PLAYER_INVENTORY_SIZE)
    for kind in InventoryEvent:
        player_inv.subscribe(kind, lambda *args, kind=kind: events.append(kind))

    loot = [items.med_heal(), items.small_heal(), items.armor_plate(), items.battery_boost(), items.small_heal()]
    for it in loot:
        placed = player_inv.place_anywhere(it)
        print(f"place {it!r}: {placed} -> {player_inv.find_position(it)}")
    check_consistency(player_inv)
    print(player_inv)

    heals = player_inv.count_by_name('Small Heal')
    print(f"Small heals carried: {heals}")
    assert heals == 2

    # Move the armor plate to the far right and back
    plate = loot[2]
    assert player_inv.move_item(plate, (player_inv.width - 2, 1))
    check_consistency(player_inv)

    dropped = player_inv.reorganize_space()
    print(f"After reorganize (dropped {len(dropped)}):")
    print(player_inv)
    check_consistency(player_inv)

    chest = GridInventory(*CHEST_INVENTORY_SIZE, items=[items.long_rifle(), items.med_heal()])
    print(f"Chest holds {len(chest)} items")
    chest.clear()
    chest.clear()
    assert len(chest) == 0

    print(f"Events seen: {len(events)}")
    print("Smoke test passed")


if __name__ == "__main__":
    main()
