"""
Core data types for the Karmic Dice pipeline.

Defines the die denominations of the Star Wars FFG narrative dice, the
adjustment record stamped onto an outcome when its face was changed, and
the change entry the summary builder collects from a batch of rolls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, MutableMapping, Optional


# Faces assumed for a die class or instance that declares none
DEFAULT_FACES = 12

# Field added to a host outcome when its face was adjusted
KARMIC_FIELD = "karmic"


class DieDenomination(str, Enum):
    """Die kinds of the narrative dice system, keyed by host tag."""

    # Positive
    ABILITY = "a"
    BOOST = "b"
    PROFICIENCY = "p"
    # Negative
    DIFFICULTY = "d"
    CHALLENGE = "c"
    SETBACK = "s"
    # Force
    FORCE = "f"

    @classmethod
    def parse(cls, tag: Any) -> Optional["DieDenomination"]:
        """Return the denomination for a host tag, or None if unknown."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except (ValueError, TypeError):
            return None

    @property
    def is_positive(self) -> bool:
        return self in (DieDenomination.ABILITY, DieDenomination.BOOST, DieDenomination.PROFICIENCY)

    @property
    def is_negative(self) -> bool:
        return self in (DieDenomination.DIFFICULTY, DieDenomination.CHALLENGE, DieDenomination.SETBACK)


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from a host object that may be a mapping or an attribute object."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def write_field(obj: Any, name: str, value: Any) -> None:
    """Write a field on a host object that may be a mapping or an attribute object."""
    if isinstance(obj, MutableMapping):
        obj[name] = value
    else:
        setattr(obj, name, value)


def denomination_tag(denom: Any) -> str:
    """Normalize a denomination (enum member or raw tag) to its string tag."""
    if isinstance(denom, DieDenomination):
        return denom.value
    if denom is None:
        return ""
    return str(denom)


@dataclass(frozen=True)
class AdjustmentRecord:
    """
    Marks an outcome whose face was changed by the karma policy.

    Only ever attached when the face actually changed; its absence on an
    outcome means the roll was left as the host produced it.
    """

    die_type: str
    original_result: int
    adjusted_result: int

    def __post_init__(self):
        if self.original_result == self.adjusted_result:
            raise ValueError(
                f"AdjustmentRecord for '{self.die_type}' must change the face "
                f"(got {self.original_result} -> {self.adjusted_result})"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the key names persisted in chat message rolls."""
        return {
            "dieType": self.die_type,
            "originalResult": self.original_result,
            "adjustedResult": self.adjusted_result,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AdjustmentRecord":
        """Create from the persisted form."""
        return cls(
            die_type=data.get("dieType") or "?",
            original_result=data["originalResult"],
            adjusted_result=data["adjustedResult"],
        )


@dataclass(frozen=True)
class ChangeEntry:
    """One adjustment found while scanning a roll batch."""

    die_type: str
    original_result: int
    adjusted_result: int

    @classmethod
    def from_record(cls, record: AdjustmentRecord) -> "ChangeEntry":
        return cls(
            die_type=record.die_type,
            original_result=record.original_result,
            adjusted_result=record.adjusted_result,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "dieType": self.die_type,
            "originalResult": self.original_result,
            "adjustedResult": self.adjusted_result,
        }

    def __str__(self) -> str:
        return f"{self.die_type}: {self.original_result} -> {self.adjusted_result}"
