"""
Chat annotation hook.

Runs on the host's preCreateChatMessage event, before a chat message is
persisted. When any die in the message's rolls was adjusted, the message
body is wrapped in a card that keeps the original body and appends a
collapsible list of the adjustments.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Optional

from karmic_dice.config import KarmicDiceConfig
from karmic_dice.dice_types import read_field, write_field
from karmic_dice.errors import run_stage
from karmic_dice.summary.summary_builder import SummaryRenderer, collect_changes, wrap_content

logger = logging.getLogger(__name__)


class ChatAnnotationHook:
    """Callable registered for preCreateChatMessage."""

    def __init__(
        self,
        renderer: Optional[SummaryRenderer] = None,
        config: Optional[KarmicDiceConfig] = None,
    ):
        self._config = config or KarmicDiceConfig()
        self._renderer = renderer or SummaryRenderer(
            no_adjustments_text=self._config.no_adjustments_text
        )

    def __call__(self, data: Any, options: Any = None, user_id: Optional[str] = None) -> bool:
        """
        Annotate a chat message payload in place.

        Args:
            data: Mutable chat message payload with "rolls" and "content"
            options: Host creation options (unused)
            user_id: Id of the user creating the message (unused)

        Returns:
            True if the payload content was rewritten
        """
        result = run_stage("annotate chat message", self._annotate, data, default=False)
        return bool(result.value)

    def _annotate(self, data: Any) -> bool:
        rolls = read_field(data, "rolls")
        if isinstance(rolls, (str, bytes)) or not isinstance(rolls, Sequence) or not rolls:
            return False

        changes = collect_changes(rolls)
        if not changes:
            return False

        summary_html = self._renderer.render(changes)
        content = wrap_content(read_field(data, "content"), summary_html, self._config.summary_title)
        write_field(data, "content", content)

        logger.info(f"Applied Karmic summary to chat message ({len(changes)} adjusted die/dice).")
        return True
