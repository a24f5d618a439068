"""
Configuration and logging setup for Karmic Dice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

from karmic_dice.dice_types import DEFAULT_FACES
from karmic_dice.summary.summary_builder import DEFAULT_NO_ADJUSTMENTS_TEXT, DEFAULT_SUMMARY_TITLE


MODULE_ID = "swrpg-karmic-dice"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@dataclass
class KarmicDiceConfig:
    """Configuration for the Karmic Dice module."""

    module_id: str = MODULE_ID
    expected_system_id: str = "starwarsffg"  # Host ruleset the module runs under
    default_faces: int = DEFAULT_FACES

    # Chat card text
    summary_title: str = DEFAULT_SUMMARY_TITLE
    no_adjustments_text: str = DEFAULT_NO_ADJUSTMENTS_TEXT

    # Runtime options
    verbose: bool = False

    def __post_init__(self):
        if self.default_faces < 1:
            raise ValueError(f"default_faces must be at least 1, got {self.default_faces}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KarmicDiceConfig":
        """Create from host-provided settings, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
