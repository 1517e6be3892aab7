# parcel_packer/packing.py
"""
Core placement logic.

This module provides the geometry-only 3D placement engine and the helpers
around it:
- fits_in_container, aabb_overlap, collides_with_existing
- anchor frontier maintenance: next_anchors, merge_anchors
- the greedy anchor-point placer: arrange
- summary / notification formatting helpers

Placement is a single greedy pass. Parcels are shuffled, stably sorted by
descending volume, then each one goes to the first anchor of the frontier
(ordered by y, then z, then x) where it fits inside the container without
overlapping anything already placed. Parcels are never rotated. A parcel
that finds no anchor is reported as unplaced and not retried.

The implementations intentionally remain pure-Python and operate on the
dataclasses defined in `parcel_packer.models`.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence, Union

from .config import get_settings
from .exceptions import TooManyItemsError
from .models import (
    ArrangeResult,
    Container,
    Cuboid,
    PlacementItem,
    Point3,
    RenderableParcel,
    Size3,
)

logger = logging.getLogger(__name__)

RandomSource = Union[random.Random, int, None]

# ----------------------------
# Geometry helpers
# ----------------------------


def fits_in_container(footprint: Cuboid, container: Container) -> bool:
    """
    Check that a footprint does not stick out of the container's max corner.

    Only the max side is tested: anchors are always derived from in-bounds
    corners, so a footprint's min corner can never lie below the container's.
    """
    bounds = container.bounds
    return (
        footprint.x2 <= bounds.x2
        and footprint.y2 <= bounds.y2
        and footprint.z2 <= bounds.z2
    )


def aabb_overlap(a: Cuboid, b: Cuboid) -> bool:
    """
    Axis-aligned bounding box overlap test in 3D.
    Returns True if boxes overlap (i.e., collision).
    """
    return a.overlaps(b)


def collides_with_existing(footprint: Cuboid, occupied: Iterable[Cuboid]) -> bool:
    """
    Return True if `footprint` overlaps any cuboid in `occupied`.
    """
    return any(aabb_overlap(footprint, placed) for placed in occupied)


# ----------------------------
# Anchor frontier
# ----------------------------


def _anchor_order(anchor: Point3):
    x, y, z = anchor
    return (y, z, x)


def next_anchors(anchor: Point3, size: Size3) -> List[Point3]:
    """
    The three outward corners of a parcel of `size` placed at `anchor`:
    one step along x, one along y, one along z.
    """
    x, y, z = anchor
    w, h, d = size
    return [(x + w, y, z), (x, y + h, z), (x, y, z + d)]


def merge_anchors(frontier: Sequence[Point3], new: Iterable[Point3]) -> List[Point3]:
    """
    Append `new` to `frontier`, drop exact duplicates (first occurrence kept)
    and sort bottom-up, then front-to-back, then left-to-right.
    """
    merged = list(dict.fromkeys([*frontier, *new]))
    merged.sort(key=_anchor_order)
    return merged


def _find_anchor(
    size: Size3,
    frontier: Sequence[Point3],
    occupied: Sequence[Cuboid],
    container: Container,
) -> Optional[int]:
    """
    Index of the first anchor in `frontier` where a parcel of `size` fits
    inside the container without collisions, or None.
    """
    for index, anchor in enumerate(frontier):
        footprint = Cuboid.from_origin(anchor, size)
        if not fits_in_container(footprint, container):
            continue
        if collides_with_existing(footprint, occupied):
            continue
        return index
    return None


def _as_rng(rng: RandomSource) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


# ----------------------------
# Placement engine
# ----------------------------


def arrange(
    container: Container,
    items: Sequence[PlacementItem],
    rng: RandomSource = None,
    max_items: Optional[int] = None,
) -> ArrangeResult:
    """
    Place `items` inside `container`.

    - rng: a random.Random, an int seed or None (unseeded). The same seed and
      input always yield the same layout; calling again without a seed
      explores another one.
    - max_items: ceiling on len(items); read from the environment settings
      (PARCEL_PACKER_MAX_ITEMS) when None.

    Returns an ArrangeResult with placed parcels (center positions),
    unplaced items and the per-type summary.
    """
    limit = get_settings().max_items if max_items is None else max_items
    if len(items) > limit:
        raise TooManyItemsError(len(items), limit)

    order = list(items)
    _as_rng(rng).shuffle(order)
    # stable: equal volumes keep their shuffled order
    order.sort(key=lambda it: it.volume, reverse=True)

    result = ArrangeResult()
    occupied: List[Cuboid] = []
    frontier: List[Point3] = [container.min_corner]

    for item in order:
        index = _find_anchor(item.size, frontier, occupied, container)
        if index is None:
            result.unplaced.append(item)
            continue

        anchor = frontier.pop(index)
        w, h, d = item.size
        ax, ay, az = anchor
        occupied.append(Cuboid.from_origin(anchor, item.size))
        result.placed.append(
            RenderableParcel(
                size=item.size,
                position=(ax + w / 2, ay + h / 2, az + d / 2),
                color=item.parcel_type.color,
                name=item.name,
            )
        )
        frontier = merge_anchors(frontier, next_anchors(anchor, item.size))
        result.summary.record(item)

    logger.debug(
        "arranged %d/%d parcels in %sx%sx%s container (%d anchors left)",
        len(result.placed),
        len(order),
        container.width,
        container.height,
        container.depth,
        len(frontier),
    )
    return result


# ----------------------------
# Summary helpers
# ----------------------------

UNPLACED_HEADER = "Some parcels could not be arranged because there is not enough space:"


def format_unplaced_message(result: ArrangeResult) -> Optional[str]:
    """
    The notice shown when parcels were left out, grouped by size:

        Some parcels could not be arranged because there is not enough space:

        2 parcels of size 1x1x1

    Returns None when everything was placed.
    """
    groups = result.unplaced_by_size()
    if not groups:
        return None
    lines = [
        f"{count} {'parcel' if count == 1 else 'parcels'} of size {size}"
        for size, count in groups.items()
    ]
    return UNPLACED_HEADER + "\n\n" + "\n".join(lines)


def format_placement_summary(result: ArrangeResult) -> str:
    """
    Multi-line text summary: total placed plus one line per parcel type.
    """
    summary = result.summary
    lines = [f"Total parcels placed: {summary.total}"]
    for name, entry in summary.by_type.items():
        lines.append(f" - {name} ({entry.size}): {entry.count}")
    return "\n".join(lines)


def print_arrangement_summary(container: Container, result: ArrangeResult) -> None:
    """
    Print a human-friendly arrangement summary to stdout.
    """
    util = (
        (result.used_volume() / container.volume * 100) if container.volume > 0 else 0.0
    )
    print(f"Container size: {container.width}x{container.height}x{container.depth}")
    print(f"Volume utilization: {util:.1f}%")
    print(format_placement_summary(result))
    print()

    message = format_unplaced_message(result)
    if message:
        print(message)
    else:
        print("All parcels were successfully arranged.")


__all__ = [
    "RandomSource",
    "fits_in_container",
    "aabb_overlap",
    "collides_with_existing",
    "next_anchors",
    "merge_anchors",
    "arrange",
    "format_unplaced_message",
    "format_placement_summary",
    "print_arrangement_summary",
]
