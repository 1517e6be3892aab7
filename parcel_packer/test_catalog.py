"""
Tests for the parcel catalog, the packing session and the core dataclass
validation.
"""

import pytest

from parcel_packer import models as m
from parcel_packer.catalog import (
    CUSTOM_PARCEL_COLORS,
    PRESET_PARCEL_TYPES,
    PackingSession,
    ParcelCatalog,
    count_demand,
    expand_demand,
)
from parcel_packer.config import INITIAL_CONTAINER_SIZE, MIN_CONTAINER_DIMENSION, Settings
from parcel_packer.exceptions import (
    BuiltinParcelTypeError,
    InvalidDimensionsError,
    InvalidParcelTypeError,
    TooManyItemsError,
    UnknownParcelTypeError,
)

# ----------------------------
# Dataclass validation
# ----------------------------


def test_parcel_type_rejects_blank_name():
    with pytest.raises(InvalidParcelTypeError):
        m.ParcelType("x", "   ", (1, 1, 1))


@pytest.mark.parametrize("size", [(0, 1, 1), (1, -1, 1), (1, 1)])
def test_parcel_type_rejects_bad_size(size):
    with pytest.raises(InvalidParcelTypeError):
        m.ParcelType("x", "Box", size)


def test_parcel_type_normalizes_size_to_floats():
    pt = m.ParcelType("x", "Box", [1, 2, 3])

    assert pt.size == (1.0, 2.0, 3.0)
    assert pt.volume == 6.0
    assert pt.size_label == "1x2x3"


def test_container_rejects_non_positive_dimensions():
    with pytest.raises(InvalidDimensionsError):
        m.Container(1, 0, 1)


def test_placement_item_rejects_non_positive_size():
    with pytest.raises(InvalidDimensionsError):
        m.PlacementItem(size=(1, 1, -0.5), parcel_type=PRESET_PARCEL_TYPES[0])


# ----------------------------
# Catalog
# ----------------------------


def test_catalog_starts_with_presets():
    catalog = ParcelCatalog()

    assert [pt.id for pt in catalog] == ["s", "m", "l"]
    assert not any(pt.is_custom for pt in catalog)
    assert "m" in catalog
    assert catalog.get("l").size == (1.5, 1.5, 1.5)


def test_catalogs_do_not_share_types():
    first, second = ParcelCatalog(), ParcelCatalog()

    first.add_custom("Crate", 1, 1, 2)

    assert len(first) == 4
    assert len(second) == 3
    assert len(PRESET_PARCEL_TYPES) == 3


def test_custom_colors_cycle_through_palette():
    catalog = ParcelCatalog()

    added = [catalog.add_custom(f"Box {i}", 0.5, 0.5, 0.5) for i in range(21)]

    assert [pt.color for pt in added[:20]] == CUSTOM_PARCEL_COLORS
    assert added[20].color == CUSTOM_PARCEL_COLORS[0]
    assert catalog.color_index == 21
    assert [pt.id for pt in added[:2]] == ["custom-1", "custom-2"]
    assert all(pt.is_custom for pt in added)


@pytest.mark.parametrize(
    "name, dims",
    [("", (1, 1, 1)), ("  ", (1, 1, 1)), ("Box", (0, 1, 1)), ("Box", (1, 1, -2))],
)
def test_invalid_custom_type_is_rejected(name, dims):
    catalog = ParcelCatalog()

    with pytest.raises(InvalidParcelTypeError):
        catalog.add_custom(name, *dims)

    assert catalog.color_index == 0
    assert len(catalog) == 3


def test_builtin_types_cannot_be_removed():
    catalog = ParcelCatalog()

    with pytest.raises(BuiltinParcelTypeError):
        catalog.remove("s")


def test_unknown_type_lookup():
    catalog = ParcelCatalog()

    with pytest.raises(UnknownParcelTypeError):
        catalog.get("nope")
    with pytest.raises(KeyError):
        catalog.remove("nope")


def test_remove_custom_type():
    catalog = ParcelCatalog()
    crate = catalog.add_custom("Crate", 1, 1, 2)

    removed = catalog.remove(crate.id)

    assert removed == crate
    assert crate.id not in catalog


def test_expand_demand_follows_catalog_order():
    demand = {"l": 1, "s": 2, "m": 0, "ghost": 4}

    items = expand_demand(PRESET_PARCEL_TYPES, demand)

    assert [it.parcel_type.id for it in items] == ["s", "s", "l"]
    assert items[0].size == (0.5, 0.5, 0.5)


def test_count_demand_ignores_unknown_and_negative():
    assert count_demand(PRESET_PARCEL_TYPES, {"s": 2, "m": -4, "l": 3, "ghost": 9}) == 5


def test_expand_demand_rejects_huge_demand_up_front():
    with pytest.raises(TooManyItemsError) as excinfo:
        expand_demand(PRESET_PARCEL_TYPES, {"s": 10**12, "m": 1}, max_items=5)

    assert excinfo.value.count == 10**12 + 1
    assert excinfo.value.limit == 5


def test_expand_demand_at_ceiling_is_allowed():
    items = expand_demand(PRESET_PARCEL_TYPES, {"s": 3, "l": 2}, max_items=5)

    assert len(items) == 5


# ----------------------------
# Session
# ----------------------------


def test_session_defaults():
    session = PackingSession()

    assert session.container_size == INITIAL_CONTAINER_SIZE
    assert session.demand == {"s": 0, "m": 0, "l": 0}
    assert session.result is None
    assert session.items() == []


def test_quantities_are_clamped_to_zero():
    session = PackingSession()

    assert session.set_quantity("m", -3) == 0
    assert session.set_quantity("m", 2) == 2
    with pytest.raises(UnknownParcelTypeError):
        session.set_quantity("ghost", 1)


def test_container_dimension_is_clamped_and_clears_result():
    session = PackingSession()
    session.set_quantity("m", 1)
    session.arrange(rng=0)
    assert session.result is not None

    size = session.set_container_dimension(1, -5)

    assert size == (4.0, MIN_CONTAINER_DIMENSION, 2.5)
    assert session.result is None
    with pytest.raises(IndexError):
        session.set_container_dimension(3, 1.0)


def test_session_arrange_uses_custom_types():
    session = PackingSession()
    crate = session.add_parcel_type("Crate", 1, 1, 2)
    session.set_quantity(crate.id, 2)
    session.set_quantity("s", 4)

    result = session.arrange(rng=7)

    assert result is session.result
    assert result.summary.total == 6
    assert result.summary.by_type["Crate"].size == "1x1x2"
    assert result.summary.by_type["Small box"].count == 4


def test_removing_type_drops_its_demand():
    session = PackingSession()
    crate = session.add_parcel_type("Crate", 1, 1, 2)
    session.set_quantity(crate.id, 3)

    session.remove_parcel_type(crate.id)

    assert crate.id not in session.demand
    assert session.items() == []


def test_session_reset():
    session = PackingSession()
    session.add_parcel_type("Crate", 1, 1, 2)
    session.set_quantity("m", 2)
    session.set_container_dimension(0, 10)
    session.arrange(rng=1)

    session.reset()

    assert session.container_size == INITIAL_CONTAINER_SIZE
    assert [pt.id for pt in session.catalog] == ["s", "m", "l"]
    assert session.catalog.color_index == 0
    assert session.demand == {"s": 0, "m": 0, "l": 0}
    assert session.result is None


def test_session_enforces_item_ceiling():
    session = PackingSession(settings=Settings(max_items=3))
    session.set_quantity("s", 4)

    with pytest.raises(TooManyItemsError):
        session.arrange(rng=0)


def test_huge_session_demand_rejected_before_expansion():
    session = PackingSession(settings=Settings(max_items=3))
    session.set_quantity("s", 10**12)

    with pytest.raises(TooManyItemsError) as excinfo:
        session.arrange(rng=0)

    assert excinfo.value.count == 10**12
    assert session.result is None


# ----------------------------
# Settings
# ----------------------------


def test_settings_from_env():
    settings = Settings.from_env(
        {"PARCEL_PACKER_MAX_ITEMS": "10", "PARCEL_PACKER_LOG_LEVEL": "debug"}
    )

    assert settings.max_items == 10
    assert settings.log_level == "DEBUG"


def test_settings_defaults_from_empty_env():
    assert Settings.from_env({}) == Settings()


@pytest.mark.parametrize("raw", ["lots", "0"])
def test_settings_reject_bad_max_items(raw):
    with pytest.raises(ValueError):
        Settings.from_env({"PARCEL_PACKER_MAX_ITEMS": raw})
