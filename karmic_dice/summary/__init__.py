"""
Chat summary of karmic adjustments.

Collects adjustments from a roll batch and renders them for a chat card.
"""

from karmic_dice.summary.summary_builder import (
    DEFAULT_NO_ADJUSTMENTS_TEXT,
    DEFAULT_SUMMARY_TITLE,
    SummaryRenderer,
    collect_changes,
    iter_outcomes,
    render_summary,
    wrap_content,
)

__all__ = [
    "DEFAULT_NO_ADJUSTMENTS_TEXT",
    "DEFAULT_SUMMARY_TITLE",
    "SummaryRenderer",
    "collect_changes",
    "iter_outcomes",
    "render_summary",
    "wrap_content",
]
