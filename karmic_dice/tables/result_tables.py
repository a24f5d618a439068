"""
Result-table resolver for the host's dice symbol registry.

The FFG system keeps one result table per die kind (ABILITY_RESULTS,
BOOST_RESULTS, ...), each mapping a face index to the symbols printed on
that face along with a localizable label and an image path. This module
maps a die denomination to its table and to a human display name.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from karmic_dice.dice_types import DieDenomination, denomination_tag, read_field

logger = logging.getLogger(__name__)


# Host registry key holding the result table for each denomination
RESULT_TABLE_KEYS: dict[DieDenomination, str] = {
    # positive
    DieDenomination.ABILITY: "ABILITY_RESULTS",
    DieDenomination.BOOST: "BOOST_RESULTS",
    DieDenomination.PROFICIENCY: "PROFICIENCY_RESULTS",
    # negative
    DieDenomination.DIFFICULTY: "DIFFICULTY_RESULTS",
    DieDenomination.CHALLENGE: "CHALLENGE_RESULTS",
    DieDenomination.SETBACK: "SETBACK_RESULTS",
    # force
    DieDenomination.FORCE: "FORCE_RESULTS",
}

DENOMINATION_LABELS: dict[DieDenomination, str] = {
    DieDenomination.BOOST: "Boost",
    DieDenomination.SETBACK: "Setback",
    DieDenomination.ABILITY: "Ability",
    DieDenomination.DIFFICULTY: "Difficulty",
    DieDenomination.PROFICIENCY: "Proficiency",
    DieDenomination.CHALLENGE: "Challenge",
    DieDenomination.FORCE: "Force",
}


Localizer = Callable[[str], str]


def identity_localizer(key: str) -> str:
    """Localizer used when the host provides none."""
    return key


class ResultTableResolver:
    """
    Looks up die faces in the host's result-table registry.

    Never raises for a missing registry, table or face; callers get None
    (tables and entries) or a fallback string (labels).
    """

    def __init__(
        self,
        registry: Optional[Mapping[str, Any]] = None,
        localize: Optional[Localizer] = None,
    ):
        """
        Initialize the resolver.

        Args:
            registry: Host symbol registry keyed by RESULT_TABLE_KEYS values
            localize: Host localization function for label references
        """
        self._registry = registry
        self._localize = localize or identity_localizer

    def table_for(self, denom: Any) -> Optional[Any]:
        """Get the result table for a denomination, or None."""
        parsed = DieDenomination.parse(denom)
        if parsed is None or not self._registry:
            return None
        return read_field(self._registry, RESULT_TABLE_KEYS[parsed]) or None

    def face_entry(self, denom: Any, face: int) -> Optional[Any]:
        """Get the symbol entry for one face, or None."""
        table = self.table_for(denom)
        if not table:
            return None
        if isinstance(table, Mapping):
            # JSON-shaped registries key faces by string
            entry = table.get(face)
            if entry is None:
                entry = table.get(str(face))
            return entry
        if isinstance(table, (list, tuple)):
            # Sequence tables are indexed by face, slot 0 unused
            return table[face] if 0 < face < len(table) else None
        return None

    def label_for(self, denom: Any) -> str:
        """Display name for a denomination; the raw tag if unrecognized."""
        parsed = DieDenomination.parse(denom)
        if parsed is not None:
            return DENOMINATION_LABELS[parsed]
        return denomination_tag(denom) or "Unknown"

    def face_label(self, denom: Any, face: int) -> str:
        """Localized label for a face, or 'Face N' when the table has none."""
        label_ref = read_field(self.face_entry(denom, face), "label")
        if label_ref:
            return self._localize(label_ref)
        return f"Face {face}"

    def face_image(self, denom: Any, face: int) -> Optional[str]:
        """Image path for a face, or None."""
        return read_field(self.face_entry(denom, face), "image") or None
