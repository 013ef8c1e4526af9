import pytest

from venue_reservation.domain import Item, ItemStatus, VenueMap, Zone


@pytest.fixture
def hall() -> VenueMap:
    return VenueMap(
        items=[
            Item(id="A1", x=50, y=50),
            Item(id="A2", x=90, y=50, status=ItemStatus.RESERVED),
            Item(id="T1", x=300, y=300, type="table"),
        ],
        zones=[Zone(id="front", name="Партер", points=[(0, 0), (200, 0), (200, 100), (0, 100)])],
    )


def test_get_item_by_id(hall: VenueMap):
    assert hall.get_item_by_id("A2").id == "A2"
    assert hall.get_item_by_id("Z9") is None


def test_get_item_by_id_returns_first_duplicate():
    first = Item(id="dup", label="first")
    venue = VenueMap(items=[first, Item(id="dup", label="second")])

    assert venue.get_item_by_id("dup") is first


def test_add_and_remove_item(hall: VenueMap):
    hall.add_item(Item(id="A3", x=130, y=50))
    assert hall.get_item_by_id("A3") is not None

    hall.remove_item("A3")
    assert hall.get_item_by_id("A3") is None


def test_add_item_rejects_foreign_objects(hall: VenueMap):
    with pytest.raises(TypeError):
        hall.add_item({"id": "A3"})


def test_filters_by_status_and_type(hall: VenueMap):
    assert [i.id for i in hall.get_items_by_status("reserved")] == ["A2"]
    assert [i.id for i in hall.get_items_by_status(ItemStatus.AVAILABLE)] == ["A1", "T1"]
    assert [i.id for i in hall.get_items_by_type("table")] == ["T1"]


def test_get_item_at_position_returns_topmost():
    bottom = Item(id="bottom", x=0, y=0, width=100, height=100)
    top = Item(id="top", x=0, y=0, width=20, height=20)
    venue = VenueMap(items=[bottom, top])

    assert venue.get_item_at_position(5, 5) is top
    assert venue.get_item_at_position(40, 40) is bottom
    assert venue.get_item_at_position(500, 500) is None


def test_items_in_zone(hall: VenueMap):
    assert [i.id for i in hall.get_items_in_zone("front")] == ["A1", "A2"]
    assert hall.get_items_in_zone("unknown") == []


def test_zone_with_less_than_three_points_is_empty(hall: VenueMap):
    hall.add_zone(Zone(id="line", points=[(0, 0), (500, 500)]))

    assert hall.get_items_in_zone("line") == []

    hall.remove_zone("line")
    assert hall.get_zone_by_id("line") is None


def test_round_trip_through_dict(hall: VenueMap):
    restored = VenueMap.from_dict(hall.to_dict())

    assert [i.id for i in restored.items] == ["A1", "A2", "T1"]
    assert restored.get_item_by_id("A2").status == ItemStatus.RESERVED
    assert restored.zones[0].name == "Партер"
    assert (restored.width, restored.height) == (800, 600)
