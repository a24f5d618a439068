"""
Karmic Dice - roll interception and adjustment for Star Wars FFG dice.

Tracks per-denomination roll statistics, passes every die outcome through a
swappable karma policy, and annotates chat messages whose dice were adjusted.
"""

from karmic_dice.config import KarmicDiceConfig, setup_logging
from karmic_dice.dice_types import (
    DEFAULT_FACES,
    AdjustmentRecord,
    ChangeEntry,
    DieDenomination,
)
from karmic_dice.ledger import KarmaLedger, LedgerEntry, get_ledger, reset_ledger
from karmic_dice.policy import IdentityPolicy, KarmaPolicy, apply_policy
from karmic_dice.interception import RollInterceptor

__version__ = "0.1.0"

__all__ = [
    "KarmicDiceConfig",
    "setup_logging",
    "DEFAULT_FACES",
    "AdjustmentRecord",
    "ChangeEntry",
    "DieDenomination",
    "KarmaLedger",
    "LedgerEntry",
    "get_ledger",
    "reset_ledger",
    "IdentityPolicy",
    "KarmaPolicy",
    "apply_policy",
    "RollInterceptor",
]
