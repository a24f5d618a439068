"""
Karma ledger for per-denomination roll statistics.

Counts every face observed for each die denomination so a karma policy
can look at the history of a die type before deciding on an adjustment.
Entries are created lazily on the first roll of a denomination and only
ever grow; the process-wide ledger lives until reset_ledger() or restart.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from karmic_dice.dice_types import DEFAULT_FACES, denomination_tag

logger = logging.getLogger(__name__)


@dataclass
class LedgerEntry:
    """Roll history for one die denomination."""

    face_count: int
    roll_count: int = 0
    face_frequency: dict[int, int] = field(default_factory=dict)

    @classmethod
    def create(cls, face_count: int) -> "LedgerEntry":
        """Create an entry with a zeroed slot for every face."""
        return cls(
            face_count=face_count,
            roll_count=0,
            face_frequency={face: 0 for face in range(1, face_count + 1)},
        )

    def frequency(self, face: int) -> int:
        """How many times a face has been rolled."""
        return self.face_frequency.get(face, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "face_count": self.face_count,
            "roll_count": self.roll_count,
            "face_frequency": dict(self.face_frequency),
        }


def _is_valid_face(face: Any) -> bool:
    return isinstance(face, int) and not isinstance(face, bool)


class KarmaLedger:
    """
    Per-denomination face-frequency counters.

    Mutated once per roll by the roll interceptor. Mutations are serialized
    through a lock so a threaded host keeps the counts consistent.
    """

    def __init__(self) -> None:
        self._entries: dict[str, LedgerEntry] = {}
        self._lock = threading.Lock()

    def record_face(self, denom: Any, face: Any, faces: Optional[int] = None) -> None:
        """
        Register one observed face for a denomination.

        An empty denomination or a non-integer face is ignored. The first
        call for a denomination fixes its face count (faces, or 12 if unset).
        A face outside that range gets a slot on demand.
        """
        tag = denomination_tag(denom)
        if not tag or not _is_valid_face(face):
            return

        with self._lock:
            entry = self._entries.get(tag)
            if entry is None:
                entry = LedgerEntry.create(faces or DEFAULT_FACES)
                self._entries[tag] = entry
            entry.roll_count += 1
            entry.face_frequency[face] = entry.face_frequency.get(face, 0) + 1

        logger.debug(f"Ledger: {tag} rolled {face} (roll #{entry.roll_count})")

    def get_entry(self, denom: Any) -> Optional[LedgerEntry]:
        """Get the entry for a denomination, or None if never rolled."""
        return self._entries.get(denomination_tag(denom))

    def denominations(self) -> list[str]:
        """Tags of all denominations observed so far, in first-roll order."""
        return list(self._entries)

    def total_rolls(self) -> int:
        return sum(entry.roll_count for entry in self._entries.values())

    def reset(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries = {}
        logger.info("Karma ledger reset")

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the ledger."""
        return {
            "denominations": len(self._entries),
            "total_rolls": self.total_rolls(),
            "rolls_by_denomination": {
                tag: entry.roll_count for tag, entry in self._entries.items()
            },
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize all entries to a dictionary."""
        return {tag: entry.to_dict() for tag, entry in self._entries.items()}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def format_ledger(self) -> str:
        """Format the ledger as a human-readable string."""
        lines = [
            "=== Karma Ledger ===",
            f"Total Rolls: {self.total_rolls()}",
            "",
        ]
        for tag, entry in self._entries.items():
            counts = ", ".join(
                f"{face}:{count}" for face, count in sorted(entry.face_frequency.items())
            )
            lines.append(f"{tag} (d{entry.face_count}) x{entry.roll_count}: {counts}")
        return "\n".join(lines)


# Process-wide access
_ledger: Optional[KarmaLedger] = None


def get_ledger() -> KarmaLedger:
    """Get the process-wide KarmaLedger instance."""
    global _ledger
    if _ledger is None:
        _ledger = KarmaLedger()
    return _ledger


def reset_ledger() -> KarmaLedger:
    """Replace the process-wide ledger with a fresh instance and return it."""
    global _ledger
    _ledger = KarmaLedger()
    return _ledger
