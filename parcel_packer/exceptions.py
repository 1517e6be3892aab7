# parcel_packer/exceptions.py
"""
Error types raised by parcel_packer.

Every error is a ValueError subclass so callers that only care about
"bad input" can catch ValueError. A parcel that does not fit is never an
error: it is reported in the `unplaced` list of an arrangement.
"""

from __future__ import annotations


class PackingError(ValueError):
    """Base class for all parcel_packer input errors."""


class InvalidDimensionsError(PackingError):
    """A container or parcel size is not strictly positive on every axis."""


class InvalidParcelTypeError(PackingError):
    """A parcel type definition is incomplete (blank name, bad size)."""


class UnknownParcelTypeError(PackingError, KeyError):
    """No parcel type with the requested id exists in the catalog."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain ValueError message
        return ValueError.__str__(self)


class BuiltinParcelTypeError(PackingError):
    """Built-in parcel types cannot be removed from a catalog."""


class TooManyItemsError(PackingError):
    """The expanded demand exceeds the configured item ceiling."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"{count} parcels requested, at most {limit} can be arranged per run"
        )
        self.count = count
        self.limit = limit


__all__ = [
    "PackingError",
    "InvalidDimensionsError",
    "InvalidParcelTypeError",
    "UnknownParcelTypeError",
    "BuiltinParcelTypeError",
    "TooManyItemsError",
]
