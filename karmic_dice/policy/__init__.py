"""Karma policies for Karmic Dice."""

from karmic_dice.policy.karma_policy import (
    KarmaPolicy,
    IdentityPolicy,
    apply_policy,
)

__all__ = [
    "KarmaPolicy",
    "IdentityPolicy",
    "apply_policy",
]
