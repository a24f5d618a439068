"""
Karma policy contract.

A policy decides, for one freshly rolled face, whether to keep it or move
it to a different face of the same die. It reads the ledger entry for the
die's denomination but never mutates the ledger: the roll interceptor
records the roll first, so the entry a policy sees already counts the
face being adjusted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Protocol

from karmic_dice.dice_types import DEFAULT_FACES, denomination_tag
from karmic_dice.errors import PolicyViolationError

if TYPE_CHECKING:
    from karmic_dice.ledger.karma_ledger import KarmaLedger, LedgerEntry

logger = logging.getLogger(__name__)


class KarmaPolicy(Protocol):
    """Decision point for karma adjustments."""

    def adjust(
        self,
        denom: str,
        face: int,
        faces: int,
        entry: Optional["LedgerEntry"],
    ) -> int:
        """
        Return the face the die should show.

        Args:
            denom: Die denomination tag (a, b, p, d, c, s, f)
            face: Face the host rolled (1..faces)
            faces: Total faces on this die
            entry: Ledger history for the denomination (read-only)

        Returns:
            Adjusted face index in [1, faces]
        """
        ...


class IdentityPolicy:
    """Baseline policy: never changes a roll."""

    def adjust(
        self,
        denom: str,
        face: int,
        faces: int,
        entry: Optional["LedgerEntry"],
    ) -> int:
        return face


def apply_policy(
    policy: KarmaPolicy,
    denom: Any,
    face: int,
    faces: Optional[int],
    ledger: "KarmaLedger",
) -> int:
    """
    Run a policy for one roll and validate its answer.

    Raises:
        PolicyViolationError: If the policy returns a non-integer, or moves
            the face to a value outside [1, faces]
    """
    faces = faces or DEFAULT_FACES
    tag = denomination_tag(denom)
    adjusted = policy.adjust(tag, face, faces, ledger.get_entry(tag))

    if not isinstance(adjusted, int) or isinstance(adjusted, bool):
        raise PolicyViolationError(
            f"{type(policy).__name__} returned {adjusted!r} for {tag} (expected an integer face)"
        )
    # Leaving the host's face as rolled is always allowed, even outside [1, faces]
    if adjusted == face:
        return adjusted
    if not 1 <= adjusted <= faces:
        raise PolicyViolationError(
            f"{type(policy).__name__} returned face {adjusted} for {tag} (valid 1-{faces})"
        )

    if adjusted != face:
        logger.debug(f"Policy adjusted {tag}: {face} -> {adjusted}")
    return adjusted
