"""
Roll interceptor for host die term classes.

Wraps the asynchronous roll() of each FFG die term class so every outcome
passes through a single choke point after the host rolled it:

1. The rolled face is recorded in the karma ledger
2. The karma policy decides whether the face should change
3. On a change, the outcome's face and symbols are rewritten and an
   AdjustmentRecord is stamped on it

Failures in steps 1-3 are logged and leave the outcome exactly as the host
produced it. Failures of the host roll itself propagate to the caller.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import MutableMapping, Sequence
from typing import Any, Awaitable, Callable, Optional

from karmic_dice.config import KarmicDiceConfig
from karmic_dice.dice_types import (
    KARMIC_FIELD,
    AdjustmentRecord,
    denomination_tag,
    read_field,
    write_field,
)
from karmic_dice.errors import run_stage
from karmic_dice.ledger.karma_ledger import KarmaLedger, get_ledger
from karmic_dice.policy.karma_policy import IdentityPolicy, KarmaPolicy, apply_policy
from karmic_dice.tables.result_tables import ResultTableResolver

logger = logging.getLogger(__name__)


RollFunction = Callable[..., Awaitable[Any]]

# Attribute set on every wrapper so an inherited wrapper is recognized
_INTERCEPTOR_ATTR = "__karmic_interceptor__"


def term_denomination(term_class: Any) -> str:
    """Denomination tag declared by a die term class, '?' if none."""
    denom = getattr(term_class, "DENOMINATION", None) or getattr(term_class, "denomination", None)
    return denomination_tag(denom) or "?"


def _is_face(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class RollInterceptor:
    """
    Installs karma wrappers on die term classes, once per class.

    The set of wrapped classes is tracked explicitly so installing the same
    class twice leaves exactly one active wrapper. A roll already carrying
    the karmic marker is never wrapped again, even when another interceptor
    installed it, and uninstall_all() only restores classes this
    interceptor wrapped itself.
    """

    def __init__(
        self,
        ledger: Optional[KarmaLedger] = None,
        policy: Optional[KarmaPolicy] = None,
        resolver: Optional[ResultTableResolver] = None,
        config: Optional[KarmicDiceConfig] = None,
    ):
        self._ledger = ledger or get_ledger()
        self._policy = policy or IdentityPolicy()
        self._resolver = resolver or ResultTableResolver()
        self._config = config or KarmicDiceConfig()

        self._installed: set[type] = set()
        # Class -> roll found in its own __dict__ before wrapping (None if inherited)
        self._originals: dict[type, Optional[Any]] = {}

    @property
    def ledger(self) -> KarmaLedger:
        return self._ledger

    def is_installed(self, term_class: type) -> bool:
        """Check whether a class has been wrapped by this interceptor."""
        return term_class in self._installed

    def installed_classes(self) -> list[type]:
        return list(self._installed)

    # -------------------------------------------------------------------------
    # Wrapping
    # -------------------------------------------------------------------------

    def wrap_roll(self, roll_fn: RollFunction, denom: Any) -> RollFunction:
        """
        Wrap a roll function with ledger recording and policy adjustment.

        The wrapper awaits the original roll, post-processes the outcome and
        returns the same outcome object.
        """
        interceptor = self
        tag = denomination_tag(denom) or "?"

        @functools.wraps(roll_fn)
        async def karmic_roll(term: Any, *args: Any, **kwargs: Any) -> Any:
            outcome = await roll_fn(term, *args, **kwargs)
            interceptor.process_outcome(term, outcome, tag)
            return outcome

        setattr(karmic_roll, _INTERCEPTOR_ATTR, self)
        return karmic_roll

    def process_outcome(self, term: Any, outcome: Any, denom: str) -> Optional[AdjustmentRecord]:
        """
        Record and adjust one rolled outcome behind the failure boundary.

        Returns:
            The AdjustmentRecord stamped on the outcome, or None if the face
            was unchanged or post-processing failed
        """
        result = run_stage("adjust roll", self._adjust_outcome, term, outcome, denom)
        return result.value

    def _adjust_outcome(self, term: Any, outcome: Any, denom: str) -> Optional[AdjustmentRecord]:
        faces = read_field(term, "faces") or self._config.default_faces
        original = read_field(outcome, "result")

        # Count first so the policy sees this roll in the history
        self._ledger.record_face(denom, original, faces)
        if not _is_face(original):
            return None

        adjusted = apply_policy(self._policy, denom, original, faces, self._ledger)
        if adjusted == original:
            return None

        # Resolve everything before touching the outcome
        symbols = self._resolver.face_entry(denom, adjusted)
        record = AdjustmentRecord(
            die_type=denom,
            original_result=original,
            adjusted_result=adjusted,
        )

        write_field(outcome, "result", adjusted)
        if symbols:
            write_field(outcome, "ffg", symbols)
        write_field(outcome, KARMIC_FIELD, record.to_dict() if isinstance(outcome, MutableMapping) else record)

        logger.info(f"Karmic adjustment on {denom}: {original} -> {adjusted}")
        return record

    # -------------------------------------------------------------------------
    # Installation
    # -------------------------------------------------------------------------

    def install_on_term(self, term_class: Any) -> bool:
        """
        Wrap the roll() of one die term class.

        Returns:
            True if a wrapper was installed, False if the class was skipped
            (no callable roll, or already wrapped)
        """
        roll_fn = getattr(term_class, "roll", None)
        if term_class is None or not callable(roll_fn):
            return False
        if term_class in self._installed:
            return False

        denom = term_denomination(term_class)

        # Any karmic wrapper already on the class or a base, whoever installed
        # it, counts the roll; a second one would count it twice
        if hasattr(roll_fn, _INTERCEPTOR_ATTR):
            self._installed.add(term_class)
            return False

        self._originals[term_class] = term_class.__dict__.get("roll")
        term_class.roll = self.wrap_roll(roll_fn, denom)
        self._installed.add(term_class)

        logger.info(f"Installed karmic patch on die term: {term_class.__name__} (denom={denom})")
        return True

    def install_all(self, term_classes: Any) -> int:
        """
        Install wrappers on every die term class the host exposes.

        A missing or malformed registry is reported and nothing is installed.

        Returns:
            Number of classes newly wrapped
        """
        if term_classes is None or isinstance(term_classes, (str, bytes)) or not isinstance(term_classes, Sequence):
            logger.warning("Host die term registry not found; cannot patch FFG dice terms.")
            return 0

        installed = 0
        for term_class in term_classes:
            if self.install_on_term(term_class):
                installed += 1
        return installed

    def uninstall_all(self) -> None:
        """Restore the original roll() of every wrapped class."""
        # Only classes this interceptor wrapped itself are restored
        for term_class, original in list(self._originals.items()):
            if original is not None:
                term_class.roll = original
            elif "roll" in term_class.__dict__:
                delattr(term_class, "roll")
        self._originals.clear()
        self._installed.clear()
        logger.info("Removed karmic patches from all die terms")
