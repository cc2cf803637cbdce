class Item:
    def __init__(self, id, name, w=1, h=1, description=""):
        self.id = id
        self.name = name
        # size is fixed for the lifetime of the item
        self._w = int(w)
        self._h = int(h)
        self.description = description

    @property
    def w(self):
        return self._w

    @property
    def h(self):
        return self._h

    @property
    def size(self):
        return (self._w, self._h)

    @property
    def area(self):
        return self._w * self._h

    def to_dict(self):
        return {
            "id": self.id, "name": self.name,
            "w": self._w, "h": self._h,
            "description": self.description
        }

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Item(id={self.id!r}, name={self.name!r}, {self._w}x{self._h})"

# convenience factory helpers
def small_heal():
    return Item('small_heal', 'Small Heal', w=1, h=1, description="Small healing vial")

def med_heal():
    return Item('med_heal', 'Med Heal', w=1, h=2, description="Tall healing flask")

def battery_boost():
    return Item('battery', 'Overclock', w=2, h=1, description="Wide battery pack")

def armor_plate():
    return Item('armor_plate', 'Armor Plate', w=2, h=2, description="Heavy plating")

def long_rifle():
    return Item('long_rifle', 'Long Rifle', w=4, h=1, description="Takes a whole row")
