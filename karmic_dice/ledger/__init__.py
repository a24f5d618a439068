"""
Roll statistics ledger for Karmic Dice.

Tracks how often each face of each die denomination has been rolled.
"""

from karmic_dice.ledger.karma_ledger import (
    KarmaLedger,
    LedgerEntry,
    get_ledger,
    reset_ledger,
)

__all__ = [
    "KarmaLedger",
    "LedgerEntry",
    "get_ledger",
    "reset_ledger",
]
