"""
Batch summary builder for chat messages.

Scans the rolls attached to one chat event (rolls -> terms -> results),
collects every karmic adjustment in traversal order, and renders the
before/after list shown in the chat card.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Iterator, Optional

from karmic_dice.dice_types import (
    KARMIC_FIELD,
    AdjustmentRecord,
    ChangeEntry,
    read_field,
)
from karmic_dice.tables.result_tables import ResultTableResolver

logger = logging.getLogger(__name__)


DEFAULT_NO_ADJUSTMENTS_TEXT = "No Karmic adjustments were applied."
DEFAULT_SUMMARY_TITLE = "Karmic Dice Adjustments"


# =============================================================================
# TRAVERSAL
# =============================================================================


def _valid_sequence(value: Any) -> Optional[Sequence]:
    """Return value if it is a real sequence of elements, else None."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return None
    return value


def _children(parent: Any, field_name: str) -> Sequence:
    """Child sequence of one tree level; empty when the level is malformed."""
    if parent is None or isinstance(parent, (str, bytes)):
        return ()
    return _valid_sequence(read_field(parent, field_name)) or ()


def iter_outcomes(rolls: Any) -> Iterator[Any]:
    """
    Yield every outcome in a roll batch in roll, term, result order.

    Malformed levels (a non-sequence batch, a roll without terms, a term
    without results) are skipped.
    """
    for roll in _valid_sequence(rolls) or ():
        for term in _children(roll, "terms"):
            yield from _children(term, "results")


def _as_change(karmic: Any) -> Optional[ChangeEntry]:
    """Convert one outcome's karmic field into a ChangeEntry if it marks a change."""
    if isinstance(karmic, AdjustmentRecord):
        return ChangeEntry.from_record(karmic)
    if not isinstance(karmic, Mapping):
        return None

    original = karmic.get("originalResult")
    adjusted = karmic.get("adjustedResult")
    for value in (original, adjusted):
        if not isinstance(value, int) or isinstance(value, bool):
            return None
    if original == adjusted:
        return None

    return ChangeEntry(
        die_type=karmic.get("dieType") or "?",
        original_result=original,
        adjusted_result=adjusted,
    )


def collect_changes(rolls: Any) -> list[ChangeEntry]:
    """
    Collect all karmic adjustments from a batch of rolls.

    Args:
        rolls: Sequence of rolls, each with a "terms" sequence whose terms
            each carry a "results" sequence of outcomes

    Returns:
        One ChangeEntry per adjusted outcome, in traversal order
    """
    changes = []
    for outcome in iter_outcomes(rolls):
        if isinstance(outcome, (str, bytes)):
            continue
        change = _as_change(read_field(outcome, KARMIC_FIELD))
        if change is not None:
            changes.append(change)
    return changes


# =============================================================================
# RENDERING
# =============================================================================


class SummaryRenderer:
    """Renders change entries as the HTML fragment shown in a chat card."""

    def __init__(
        self,
        resolver: Optional[ResultTableResolver] = None,
        no_adjustments_text: str = DEFAULT_NO_ADJUSTMENTS_TEXT,
    ):
        self._resolver = resolver or ResultTableResolver()
        self._no_adjustments_text = no_adjustments_text

    def render(self, changes: Sequence[ChangeEntry]) -> str:
        """Render a list of changes, or the fixed no-adjustments paragraph."""
        if not changes:
            return f"<p>{html.escape(self._no_adjustments_text)}</p>"

        items = [self._render_item(change) for change in changes]
        return f'<ul class="karmic-dice-changes">{"".join(items)}</ul>'

    def _render_item(self, change: ChangeEntry) -> str:
        die_name = html.escape(self._resolver.label_for(change.die_type))
        original = self._render_face(change.die_type, change.original_result)
        adjusted = self._render_face(change.die_type, change.adjusted_result)
        return (
            "<li>"
            f"<strong>{die_name}</strong>: "
            f'<span class="karmic-original">{original}</span>'
            " &rarr; "
            f'<span class="karmic-adjusted">{adjusted}</span>'
            "</li>"
        )

    def _render_face(self, denom: str, face: int) -> str:
        label = html.escape(self._resolver.face_label(denom, face), quote=True)
        image = self._resolver.face_image(denom, face)
        if not image:
            return label
        src = html.escape(image, quote=True)
        return f'<img src="{src}" alt="{label}" title="{label}" /> {label}'


def render_summary(
    changes: Sequence[ChangeEntry],
    resolver: Optional[ResultTableResolver] = None,
) -> str:
    """Render changes with a default renderer."""
    return SummaryRenderer(resolver).render(changes)


def wrap_content(
    original_content: Optional[str],
    summary_html: str,
    title: str = DEFAULT_SUMMARY_TITLE,
) -> str:
    """
    Wrap a chat message body with a collapsible adjustments section.

    The original body is kept unmodified ahead of the details block.
    """
    body = original_content if original_content is not None else ""
    return (
        '<div class="karmic-dice-card">\n'
        f"  {body}\n"
        '  <details class="karmic-dice-details">\n'
        f"    <summary>{html.escape(title)}</summary>\n"
        f"    {summary_html}\n"
        "  </details>\n"
        "</div>"
    )
