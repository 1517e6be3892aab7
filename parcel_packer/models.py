# parcel_packer/models.py
"""
Core datamodels for parcel_packer.

This module provides:
- Dataclass-based core models used by the placement engine (geometry-focused).
- Pydantic models used for API input/output (serialization & validation).
- Small conversion helpers between dataclasses and pydantic models.

Keep dataclasses free of framework-specific dependencies so they can be used
directly by the placement engine. Pydantic models are thin wrappers for
validation/IO when exposing the functionality through FastAPI.

Coordinates: the container is centered at the origin, x runs along the width,
y along the height and z along the depth.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from .config import DEFAULT_PARCEL_COLOR, INITIAL_CONTAINER_SIZE
from .exceptions import InvalidDimensionsError, InvalidParcelTypeError

Size3 = Tuple[float, float, float]
Point3 = Tuple[float, float, float]


# ----------------------------
# Formatting helpers
# ----------------------------


def format_dimension(value: float) -> str:
    """
    Render one dimension the way it is shown to users: integral values
    without a trailing ".0" (1.0 -> "1"), everything else as repr (0.5 -> "0.5").
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_size(size: Sequence[float]) -> str:
    """Size triple as a "WxHxD" label, e.g. (1.5, 1, 0.5) -> "1.5x1x0.5"."""
    return "x".join(format_dimension(v) for v in size)


def _as_size(size: Sequence[float]) -> Size3:
    values = tuple(float(v) for v in size)
    if len(values) != 3:
        raise InvalidDimensionsError(
            f"size must have exactly three values (width, height, depth), got {len(values)}"
        )
    return values  # type: ignore[return-value]


def _is_positive(size: Size3) -> bool:
    return all(v > 0 for v in size)


# ----------------------------
# Dataclass core models
# ----------------------------


@dataclass(frozen=True)
class ParcelType:
    """
    A kind of parcel the user can request.

    Attributes:
    - id: unique identifier inside a catalog ("s", "m", "l", "custom-3", ...)
    - name: human readable name, also the key of the placement summary
    - size: (width, height, depth) in length units
    - is_custom: True for user-defined types (removable), False for presets
    - color: display color used by renderers
    """

    id: str
    name: str
    size: Size3
    is_custom: bool = False
    color: str = DEFAULT_PARCEL_COLOR

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidParcelTypeError("parcel type name must not be blank")
        try:
            size = _as_size(self.size)
        except InvalidDimensionsError as exc:
            raise InvalidParcelTypeError(str(exc)) from exc
        if not _is_positive(size):
            raise InvalidParcelTypeError(
                f"parcel type {self.name!r} must have positive dimensions, got {size}"
            )
        object.__setattr__(self, "size", size)

    @property
    def volume(self) -> float:
        w, h, d = self.size
        return w * h * d

    @property
    def size_label(self) -> str:
        return format_size(self.size)


@dataclass(frozen=True)
class PlacementItem:
    """
    One parcel to place: its size plus a back-reference to its type
    (for color and name in the output). Built fresh for every run.
    """

    size: Size3
    parcel_type: ParcelType

    def __post_init__(self) -> None:
        size = _as_size(self.size)
        if not _is_positive(size):
            raise InvalidDimensionsError(
                f"parcel size must be positive on every axis, got {size}"
            )
        object.__setattr__(self, "size", size)

    @classmethod
    def of(cls, parcel_type: ParcelType) -> "PlacementItem":
        return cls(size=parcel_type.size, parcel_type=parcel_type)

    @property
    def volume(self) -> float:
        w, h, d = self.size
        return w * h * d

    @property
    def name(self) -> str:
        return self.parcel_type.name


@dataclass(frozen=True)
class Cuboid:
    """
    Axis-aligned box given by its min corner (x1, y1, z1) and max corner
    (x2, y2, z2).
    """

    x1: float
    y1: float
    z1: float
    x2: float
    y2: float
    z2: float

    @classmethod
    def from_origin(cls, origin: Point3, size: Size3) -> "Cuboid":
        x, y, z = origin
        w, h, d = size
        return cls(x, y, z, x + w, y + h, z + d)

    @property
    def min_corner(self) -> Point3:
        return (self.x1, self.y1, self.z1)

    @property
    def max_corner(self) -> Point3:
        return (self.x2, self.y2, self.z2)

    @property
    def size(self) -> Size3:
        return (self.x2 - self.x1, self.y2 - self.y1, self.z2 - self.z1)

    @property
    def volume(self) -> float:
        w, h, d = self.size
        return w * h * d

    def overlaps(self, other: "Cuboid") -> bool:
        """
        True if both cuboids share interior volume. Touching faces do not
        count as an overlap.
        """
        return (
            self.x1 < other.x2
            and self.x2 > other.x1
            and self.y1 < other.y2
            and self.y2 > other.y1
            and self.z1 < other.z2
            and self.z2 > other.z1
        )

    def contains(self, other: "Cuboid") -> bool:
        """True if `other` lies fully inside this cuboid (faces may touch)."""
        return (
            self.x1 <= other.x1
            and self.y1 <= other.y1
            and self.z1 <= other.z1
            and other.x2 <= self.x2
            and other.y2 <= self.y2
            and other.z2 <= self.z2
        )


@dataclass(frozen=True)
class Container:
    """
    The volume parcels are arranged in. Always centered at the origin, so
    its corners are (-w/2, -h/2, -d/2) and (w/2, h/2, d/2).
    """

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        if not _is_positive((self.width, self.height, self.depth)):
            raise InvalidDimensionsError(
                "container dimensions must be positive, got "
                f"{(self.width, self.height, self.depth)}"
            )

    @classmethod
    def from_size(cls, size: Sequence[float]) -> "Container":
        w, h, d = _as_size(size)
        return cls(w, h, d)

    @property
    def size(self) -> Size3:
        return (self.width, self.height, self.depth)

    @property
    def bounds(self) -> Cuboid:
        hw, hh, hd = self.width / 2, self.height / 2, self.depth / 2
        return Cuboid(-hw, -hh, -hd, hw, hh, hd)

    @property
    def min_corner(self) -> Point3:
        return self.bounds.min_corner

    @property
    def max_corner(self) -> Point3:
        return self.bounds.max_corner

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth


@dataclass
class RenderableParcel:
    """
    A placed parcel as handed to renderers.

    - size: (width, height, depth)
    - position: center of the parcel (anchor + half extent on each axis)
    - color: display color of its type
    - name: name of its type
    """

    size: Size3
    position: Point3
    color: str
    name: str = ""

    @property
    def cuboid(self) -> Cuboid:
        """Footprint reconstructed from center and size."""
        cx, cy, cz = self.position
        w, h, d = self.size
        return Cuboid(
            cx - w / 2, cy - h / 2, cz - d / 2, cx + w / 2, cy + h / 2, cz + d / 2
        )


@dataclass
class TypeSummary:
    count: int = 0
    size: str = ""


@dataclass
class PlacementSummary:
    """
    Placed parcel counts: overall `total` and a per type-name breakdown.
    `by_type` keeps the order in which types were first placed.
    """

    total: int = 0
    by_type: Dict[str, TypeSummary] = field(default_factory=dict)

    def record(self, item: PlacementItem) -> None:
        self.total += 1
        entry = self.by_type.get(item.name)
        if entry is None:
            # first occurrence wins; same-named types share one size
            entry = self.by_type[item.name] = TypeSummary(size=format_size(item.size))
        entry.count += 1


@dataclass
class ArrangeResult:
    """Outcome of one placement run."""

    placed: List[RenderableParcel] = field(default_factory=list)
    unplaced: List[PlacementItem] = field(default_factory=list)
    summary: PlacementSummary = field(default_factory=PlacementSummary)

    @property
    def item_count(self) -> int:
        return len(self.placed) + len(self.unplaced)

    def used_volume(self) -> float:
        """Sum of volumes of placed parcels."""
        return sum(p.size[0] * p.size[1] * p.size[2] for p in self.placed)

    def unplaced_by_size(self) -> Dict[str, int]:
        """Unplaced parcel counts keyed by size label, in first-seen order."""
        return dict(Counter(format_size(it.size) for it in self.unplaced))


# ----------------------------
# Pydantic models for API surface
# ----------------------------

# Input models (Create / Request)


class ContainerCreate(BaseModel):
    width: float = Field(INITIAL_CONTAINER_SIZE[0], gt=0)
    height: float = Field(INITIAL_CONTAINER_SIZE[1], gt=0)
    depth: float = Field(INITIAL_CONTAINER_SIZE[2], gt=0)

    model_config = ConfigDict(
        json_schema_extra={"example": {"width": 4.0, "height": 2.5, "depth": 2.5}}
    )


class ParcelTypeCreate(BaseModel):
    id: str = Field(..., min_length=1, description="Unique id for the parcel type")
    name: str = Field(..., description="Display name, used to group the summary")
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    is_custom: bool = Field(False)
    color: str = Field(DEFAULT_PARCEL_COLOR, pattern=r"^#[0-9A-Fa-f]{6}$")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "custom-1",
                "name": "Shoe box",
                "width": 0.6,
                "height": 0.3,
                "depth": 0.4,
                "is_custom": True,
                "color": "#DAA520",
            }
        }
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


class ArrangeRequest(BaseModel):
    container: ContainerCreate = Field(default_factory=ContainerCreate)
    parcel_types: Optional[List[ParcelTypeCreate]] = Field(
        None, description="Parcel catalog; the built-in presets when omitted"
    )
    demand: Dict[str, NonNegativeInt] = Field(
        default_factory=dict, description="Quantity per parcel type id"
    )
    seed: Optional[int] = Field(
        None, description="Seed for the shuffle; a fresh layout on every call when omitted"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "container": {"width": 4.0, "height": 2.5, "depth": 2.5},
                "demand": {"s": 4, "m": 2, "l": 1},
                "seed": 7,
            }
        }
    )

    @field_validator("parcel_types")
    @classmethod
    def unique_type_ids(
        cls, v: Optional[List[ParcelTypeCreate]]
    ) -> Optional[List[ParcelTypeCreate]]:
        if v is None:
            return v
        seen = set()
        for pt in v:
            if pt.id in seen:
                raise ValueError(f"duplicate parcel type id {pt.id!r}")
            seen.add(pt.id)
        return v


# Output models (Read / Response)


class ParcelTypeRead(BaseModel):
    id: str
    name: str
    size: Size3
    size_label: str
    is_custom: bool
    color: str


class RenderableParcelRead(BaseModel):
    size: Size3
    position: Point3
    color: str
    name: str


class TypeSummaryRead(BaseModel):
    count: int
    size: str


class PlacementSummaryRead(BaseModel):
    total: int
    by_type: Dict[str, TypeSummaryRead]


class UnplacedGroupRead(BaseModel):
    size: str
    count: int


class ArrangeResponse(BaseModel):
    container: ContainerCreate
    placed: List[RenderableParcelRead]
    unplaced: List[UnplacedGroupRead]
    unplaced_count: int
    summary: PlacementSummaryRead
    utilization: float
    message: Optional[str] = None


# ----------------------------
# Conversion helpers
# ----------------------------


def containercreate_to_dataclass(cc: ContainerCreate) -> Container:
    """Convert ContainerCreate (pydantic) to Container dataclass."""
    return Container(width=cc.width, height=cc.height, depth=cc.depth)


def parceltypecreate_to_dataclass(pc: ParcelTypeCreate) -> ParcelType:
    """Convert ParcelTypeCreate (pydantic) to ParcelType dataclass."""
    return ParcelType(
        id=pc.id,
        name=pc.name,
        size=(pc.width, pc.height, pc.depth),
        is_custom=pc.is_custom,
        color=pc.color,
    )


def parceltype_from_dataclass(pt: ParcelType) -> ParcelTypeRead:
    """Convert ParcelType dataclass to Pydantic ParcelTypeRead."""
    return ParcelTypeRead(
        id=pt.id,
        name=pt.name,
        size=pt.size,
        size_label=pt.size_label,
        is_custom=pt.is_custom,
        color=pt.color,
    )


def arrange_response_from_result(
    container: Container, result: ArrangeResult, message: Optional[str] = None
) -> ArrangeResponse:
    """Convenience helper to create a Pydantic ArrangeResponse from dataclass outputs."""
    capacity = container.volume
    return ArrangeResponse(
        container=ContainerCreate(
            width=container.width, height=container.height, depth=container.depth
        ),
        placed=[
            RenderableParcelRead(
                size=p.size, position=p.position, color=p.color, name=p.name
            )
            for p in result.placed
        ],
        unplaced=[
            UnplacedGroupRead(size=size, count=count)
            for size, count in result.unplaced_by_size().items()
        ],
        unplaced_count=len(result.unplaced),
        summary=PlacementSummaryRead(
            total=result.summary.total,
            by_type={
                name: TypeSummaryRead(count=ts.count, size=ts.size)
                for name, ts in result.summary.by_type.items()
            },
        ),
        utilization=(result.used_volume() / capacity) * 100.0 if capacity > 0 else 0.0,
        message=message,
    )


# Expose minimal public API from this module
__all__ = [
    "Size3",
    "Point3",
    "format_dimension",
    "format_size",
    "ParcelType",
    "PlacementItem",
    "Cuboid",
    "Container",
    "RenderableParcel",
    "TypeSummary",
    "PlacementSummary",
    "ArrangeResult",
    "ContainerCreate",
    "ParcelTypeCreate",
    "ArrangeRequest",
    "ParcelTypeRead",
    "RenderableParcelRead",
    "TypeSummaryRead",
    "PlacementSummaryRead",
    "UnplacedGroupRead",
    "ArrangeResponse",
    "containercreate_to_dataclass",
    "parceltypecreate_to_dataclass",
    "parceltype_from_dataclass",
    "arrange_response_from_result",
]
