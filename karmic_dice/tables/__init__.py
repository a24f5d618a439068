"""
Host result-table lookups for Karmic Dice.

Resolves die denominations to the host's symbol tables and display names.
"""

from karmic_dice.tables.result_tables import (
    RESULT_TABLE_KEYS,
    DENOMINATION_LABELS,
    Localizer,
    ResultTableResolver,
    identity_localizer,
)

__all__ = [
    "RESULT_TABLE_KEYS",
    "DENOMINATION_LABELS",
    "Localizer",
    "ResultTableResolver",
    "identity_localizer",
]
