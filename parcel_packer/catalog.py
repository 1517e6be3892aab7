# parcel_packer/catalog.py
"""
Parcel catalog and packing session.

`ParcelCatalog` holds the parcel types a user can request: three built-in
presets plus user-defined types, which get colors from a fixed palette in
rotation. `PackingSession` bundles a catalog with the container size, the
requested quantities and the last arrangement, and applies the same input
rules as the interactive front-end (quantities never negative, container
dimensions never below MIN_CONTAINER_DIMENSION).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from . import packing
from .config import (
    INITIAL_CONTAINER_SIZE,
    MIN_CONTAINER_DIMENSION,
    Settings,
    get_settings,
)
from .exceptions import (
    BuiltinParcelTypeError,
    InvalidParcelTypeError,
    TooManyItemsError,
    UnknownParcelTypeError,
)
from .models import ArrangeResult, Container, ParcelType, PlacementItem, Size3

logger = logging.getLogger(__name__)

PRESET_PARCEL_TYPES: List[ParcelType] = [
    ParcelType("s", "Small box", (0.5, 0.5, 0.5), color="#FF6347"),  # Tomato
    ParcelType("m", "Medium box", (1.0, 1.0, 1.0), color="#4682B4"),  # SteelBlue
    ParcelType("l", "Large box", (1.5, 1.5, 1.5), color="#32CD32"),  # LimeGreen
]

CUSTOM_PARCEL_COLORS: List[str] = [
    "#DAA520",  # Goldenrod
    "#BA55D3",  # MediumOrchid
    "#20B2AA",  # LightSeaGreen
    "#FF69B4",  # HotPink
    "#8A2BE2",  # BlueViolet
    "#FF4500",  # OrangeRed
    "#ADFF2F",  # GreenYellow
    "#87CEEB",  # SkyBlue
    "#FFD700",  # Gold
    "#9932CC",  # DarkOrchid
    "#00CED1",  # DarkTurquoise
    "#FF1493",  # DeepPink
    "#7B68EE",  # MediumSlateBlue
    "#3CB371",  # MediumSeaGreen
    "#FFA07A",  # LightSalmon
    "#40E0D0",  # Turquoise
    "#EE82EE",  # Violet
    "#F08080",  # LightCoral
    "#6A5ACD",  # SlateBlue
    "#2E8B57",  # SeaGreen
]


def count_demand(
    parcel_types: Sequence[ParcelType], demand: Mapping[str, int]
) -> int:
    """Number of parcels `demand` asks for among `parcel_types`."""
    return sum(max(demand.get(pt.id, 0), 0) for pt in parcel_types)


def expand_demand(
    parcel_types: Sequence[ParcelType],
    demand: Mapping[str, int],
    max_items: Optional[int] = None,
) -> List[PlacementItem]:
    """
    Expand per-type quantities into one PlacementItem per parcel, in catalog
    order. Ids missing from `demand` or with a quantity <= 0 contribute nothing;
    demand entries for ids not in `parcel_types` are ignored.

    Raises TooManyItemsError before building anything when the total exceeds
    `max_items`.
    """
    if max_items is not None:
        total = count_demand(parcel_types, demand)
        if total > max_items:
            raise TooManyItemsError(total, max_items)
    expanded: List[PlacementItem] = []
    for pt in parcel_types:
        quantity = demand.get(pt.id, 0)
        expanded.extend(PlacementItem.of(pt) for _ in range(max(quantity, 0)))
    return expanded


@dataclass
class ParcelCatalog:
    """
    Ordered collection of parcel types.

    - color_index: position of the next palette color for custom types
    - custom_counter: number of custom types created so far (for ids)
    """

    types: List[ParcelType] = field(default_factory=lambda: list(PRESET_PARCEL_TYPES))
    color_index: int = 0
    custom_counter: int = 0
    palette: Sequence[str] = field(default_factory=lambda: list(CUSTOM_PARCEL_COLORS))

    def __iter__(self) -> Iterator[ParcelType]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, type_id: object) -> bool:
        return any(pt.id == type_id for pt in self.types)

    def get(self, type_id: str) -> ParcelType:
        for pt in self.types:
            if pt.id == type_id:
                return pt
        raise UnknownParcelTypeError(f"unknown parcel type {type_id!r}")

    def next_color(self) -> str:
        color = self.palette[self.color_index % len(self.palette)]
        self.color_index += 1
        return color

    def add_custom(
        self, name: str, width: float, height: float, depth: float
    ) -> ParcelType:
        """
        Add a user-defined parcel type and return it.

        Raises InvalidParcelTypeError for a blank name or a non-positive
        dimension; the palette does not advance in that case.
        """
        if not name or not name.strip():
            raise InvalidParcelTypeError("parcel type name must not be blank")
        size = (float(width), float(height), float(depth))
        if any(v <= 0 for v in size):
            raise InvalidParcelTypeError(
                f"parcel type {name!r} must have positive dimensions, got {size}"
            )
        self.custom_counter += 1
        new_type = ParcelType(
            id=f"custom-{self.custom_counter}",
            name=name,
            size=size,
            is_custom=True,
            color=self.next_color(),
        )
        self.types.append(new_type)
        logger.debug("added parcel type %s (%s)", new_type.id, new_type.size_label)
        return new_type

    def remove(self, type_id: str) -> ParcelType:
        """Remove a custom parcel type. Built-in types cannot be removed."""
        pt = self.get(type_id)
        if not pt.is_custom:
            raise BuiltinParcelTypeError(
                f"built-in parcel type {type_id!r} cannot be removed"
            )
        self.types = [t for t in self.types if t.id != type_id]
        return pt


@dataclass
class PackingSession:
    """
    Editable packing state: container size, catalog, demand and the last
    arrangement. Changing the container clears the last arrangement.
    """

    container_size: Size3 = INITIAL_CONTAINER_SIZE
    catalog: ParcelCatalog = field(default_factory=ParcelCatalog)
    demand: Dict[str, int] = field(default_factory=dict)
    result: Optional[ArrangeResult] = None
    settings: Settings = field(default_factory=get_settings)

    def __post_init__(self) -> None:
        for pt in self.catalog:
            self.demand.setdefault(pt.id, 0)

    @property
    def container(self) -> Container:
        return Container.from_size(self.container_size)

    def set_quantity(self, type_id: str, quantity: int) -> int:
        """Set the requested quantity for a type, clamped to >= 0."""
        self.catalog.get(type_id)
        self.demand[type_id] = max(0, int(quantity))
        return self.demand[type_id]

    def set_container_dimension(self, axis: int, value: float) -> Size3:
        """
        Set one container dimension (0 width, 1 height, 2 depth), clamped to
        MIN_CONTAINER_DIMENSION. The previous arrangement is discarded.
        """
        if axis not in (0, 1, 2):
            raise IndexError(f"axis must be 0, 1 or 2, got {axis}")
        size = list(self.container_size)
        size[axis] = max(MIN_CONTAINER_DIMENSION, float(value))
        self.container_size = (size[0], size[1], size[2])
        self.result = None
        return self.container_size

    def add_parcel_type(
        self, name: str, width: float, height: float, depth: float
    ) -> ParcelType:
        pt = self.catalog.add_custom(name, width, height, depth)
        self.demand[pt.id] = 0
        return pt

    def remove_parcel_type(self, type_id: str) -> ParcelType:
        pt = self.catalog.remove(type_id)
        self.demand.pop(type_id, None)
        return pt

    def items(self) -> List[PlacementItem]:
        return expand_demand(
            list(self.catalog), self.demand, max_items=self.settings.max_items
        )

    def arrange(self, rng: packing.RandomSource = None) -> ArrangeResult:
        """Run one placement with the current state and keep the result."""
        items = self.items()
        logger.info(
            "arranging %d parcels in %s container",
            len(items),
            "x".join(str(v) for v in self.container_size),
        )
        self.result = packing.arrange(
            self.container, items, rng=rng, max_items=self.settings.max_items
        )
        return self.result

    def reset(self) -> None:
        """Back to the initial container, the presets and zero demand."""
        self.container_size = INITIAL_CONTAINER_SIZE
        self.catalog = ParcelCatalog()
        self.demand = {pt.id: 0 for pt in self.catalog}
        self.result = None


__all__ = [
    "PRESET_PARCEL_TYPES",
    "CUSTOM_PARCEL_COLORS",
    "count_demand",
    "expand_demand",
    "ParcelCatalog",
    "PackingSession",
]
