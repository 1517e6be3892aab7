# parcel_packer/config.py
"""
Defaults and runtime settings.

Module-level constants describe the initial state of a packing session;
`Settings` carries the values that may be overridden from the environment:

- PARCEL_PACKER_MAX_ITEMS: ceiling on parcels per arrangement run
- PARCEL_PACKER_LOG_LEVEL: logging level used by the API module
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

INITIAL_CONTAINER_SIZE: Tuple[float, float, float] = (4.0, 2.5, 2.5)

# Container dimensions entered by a user are clamped to this minimum
MIN_CONTAINER_DIMENSION: float = 0.1

# Color used for parcels whose type carries none
DEFAULT_PARCEL_COLOR: str = "#00aaff"

DEFAULT_MAX_ITEMS: int = 2000
DEFAULT_LOG_LEVEL: str = "INFO"


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Attributes:
        max_items: largest number of individual parcels accepted by one run.
        log_level: name of the logging level configured by the API module.
    """

    max_items: int = DEFAULT_MAX_ITEMS
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.max_items <= 0:
            raise ValueError("max_items must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_max = env.get("PARCEL_PACKER_MAX_ITEMS")
        try:
            max_items = int(raw_max) if raw_max else DEFAULT_MAX_ITEMS
        except ValueError:
            raise ValueError(
                f"PARCEL_PACKER_MAX_ITEMS must be an integer, got {raw_max!r}"
            ) from None
        log_level = env.get("PARCEL_PACKER_LOG_LEVEL") or DEFAULT_LOG_LEVEL
        return cls(max_items=max_items, log_level=log_level.upper())


def get_settings() -> Settings:
    """Settings read from the current process environment."""
    return Settings.from_env()


__all__ = [
    "INITIAL_CONTAINER_SIZE",
    "MIN_CONTAINER_DIMENSION",
    "DEFAULT_PARCEL_COLOR",
    "DEFAULT_MAX_ITEMS",
    "Settings",
    "get_settings",
]
