"""Type-safe enums for the thread calculator."""

from enum import Enum


class Gender(str, Enum):
    """Thread gender (sex of the threaded part)"""
    INTERNAL = "internal"  # Nut / tapped hole
    EXTERNAL = "external"  # Bolt / screw

    def __str__(self) -> str:
        return self.value
