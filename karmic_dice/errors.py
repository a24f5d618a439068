"""
Error types and the post-processing failure boundary.

Every stage that runs after the host already produced a roll or a chat
message (recording statistics, applying the policy, resolving tables,
building a summary) goes through run_stage(). A failure there is logged
and converted into a failed StageResult so the user action still
completes with its unadjusted outcome or unmodified message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KarmicDiceError(Exception):
    """Base exception for Karmic Dice errors."""
    pass


class PolicyViolationError(KarmicDiceError):
    """Raised when a karma policy returns a face outside [1, faces]."""
    pass


@dataclass
class StageResult(Generic[T]):
    """Outcome of one guarded post-processing stage."""

    stage: str
    ok: bool
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return not self.ok


def run_stage(
    stage: str,
    fn: Callable[..., T],
    *args: Any,
    default: Optional[T] = None,
    **kwargs: Any,
) -> StageResult[T]:
    """
    Run one post-processing stage behind the failure boundary.

    Args:
        stage: Stage name used in the error log line
        fn: Callable to run
        default: Value carried by the result when the stage fails

    Returns:
        StageResult with the callable's return value, or a failed result
        holding the default and the caught exception
    """
    try:
        return StageResult(stage=stage, ok=True, value=fn(*args, **kwargs))
    except Exception as e:
        logger.error(f"Karmic Dice stage '{stage}' failed: {e}", exc_info=True)
        return StageResult(stage=stage, ok=False, value=default, error=e)
