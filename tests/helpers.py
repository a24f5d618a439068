"""
Test helpers for the Karmic Dice test suite.

Provides a scripted stand-in for the host platform:
- die term classes whose roll() returns pre-scripted faces
- a small FFG result registry with labels and images
- a hook registry and host environment for lifecycle tests
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


# =============================================================================
# DIE TERMS
# =============================================================================


@dataclass
class RollOutcome:
    """Host outcome for one die."""
    result: int
    ffg: Optional[dict] = None
    active: bool = True


class ScriptedDieTerm:
    """Die term whose roll() returns the next scripted face."""

    DENOMINATION = "?"
    faces = 12

    def __init__(self, script: list[int]):
        self._script = list(script)
        self.results: list[Any] = []

    async def roll(self, options: Optional[dict] = None) -> RollOutcome:
        await asyncio.sleep(0)
        outcome = RollOutcome(result=self._script.pop(0), ffg={"rolled": True})
        self.results.append(outcome)
        return outcome


def make_die_classes() -> dict[str, type]:
    """Create fresh FFG die term classes, keyed by denomination tag."""
    specs = [
        ("AbilityDie", "a", 8),
        ("BoostDie", "b", 6),
        ("ProficiencyDie", "p", 12),
        ("DifficultyDie", "d", 8),
        ("ChallengeDie", "c", 12),
        ("SetbackDie", "s", 6),
        ("ForceDie", "f", 12),
    ]
    classes = {}
    for name, denom, faces in specs:
        classes[denom] = type(name, (ScriptedDieTerm,), {"DENOMINATION": denom, "faces": faces})
    return classes


class FailingDieTerm:
    """Die term whose host roll raises."""

    DENOMINATION = "b"
    faces = 6

    async def roll(self, options: Optional[dict] = None) -> RollOutcome:
        raise RuntimeError("host dice engine failure")


def roll_die(term: Any, options: Optional[dict] = None) -> Any:
    """Run one asynchronous roll to completion."""
    return asyncio.run(term.roll(options))


def as_chat_roll(*terms: ScriptedDieTerm) -> dict[str, Any]:
    """Serialize rolled terms the way the host stores them on a chat message."""
    return {
        "terms": [
            {
                "denomination": type(term).DENOMINATION,
                "results": [_serialize_outcome(outcome) for outcome in term.results],
            }
            for term in terms
        ]
    }


def _serialize_outcome(outcome: RollOutcome) -> dict[str, Any]:
    data = {"result": outcome.result, "active": outcome.active}
    karmic = getattr(outcome, "karmic", None)
    if karmic is not None:
        data["karmic"] = karmic.to_dict()
    return data


# =============================================================================
# RESULT REGISTRY
# =============================================================================


def make_result_registry() -> dict[str, Any]:
    """FFG-style result tables for boost and setback dice."""
    return {
        "BOOST_RESULTS": {
            1: {"label": "SWFFG.DiceBlank", "image": "icons/boost-blank.png"},
            2: {"label": "SWFFG.DiceBlank", "image": "icons/boost-blank.png"},
            3: {"label": "SWFFG.DiceSuccess", "image": "icons/boost-success.png"},
            4: {"label": "SWFFG.DiceSuccessAdvantage", "image": "icons/boost-sa.png"},
            5: {"label": "SWFFG.DiceAdvantageAdvantage", "image": "icons/boost-aa.png"},
            6: {"label": "SWFFG.DiceAdvantage", "image": "icons/boost-a.png"},
        },
        "SETBACK_RESULTS": {
            "1": {"label": "SWFFG.DiceBlank"},
            "2": {"label": "SWFFG.DiceBlank"},
            "3": {"label": "SWFFG.DiceFailure"},
            "4": {"label": "SWFFG.DiceFailure"},
            "5": {"label": "SWFFG.DiceThreat"},
            "6": {"label": "SWFFG.DiceThreat"},
        },
    }


TRANSLATIONS = {
    "SWFFG.DiceBlank": "Blank",
    "SWFFG.DiceSuccess": "Success",
    "SWFFG.DiceSuccessAdvantage": "Success + Advantage",
    "SWFFG.DiceAdvantageAdvantage": "Advantage x2",
    "SWFFG.DiceAdvantage": "Advantage",
    "SWFFG.DiceFailure": "Failure",
    "SWFFG.DiceThreat": "Threat",
}


def localize(key: str) -> str:
    return TRANSLATIONS.get(key, key)


# =============================================================================
# POLICIES
# =============================================================================


class MappingPolicy:
    """Policy that moves faces according to a fixed mapping."""

    def __init__(self, mapping: dict[int, int]):
        self.mapping = mapping
        self.seen: list[tuple] = []

    def adjust(self, denom, face, faces, entry):
        self.seen.append((denom, face, faces, entry.roll_count if entry else None))
        return self.mapping.get(face, face)


class OutOfRangePolicy:
    """Policy that violates the face range contract."""

    def adjust(self, denom, face, faces, entry):
        return faces + 1


class RaisingPolicy:
    def adjust(self, denom, face, faces, entry):
        raise RuntimeError("policy exploded")


# =============================================================================
# HOST
# =============================================================================


class FakeHooks:
    """Records hook subscriptions and dispatches events like the host."""

    def __init__(self):
        self._once: dict[str, list[Callable]] = {}
        self._on: dict[str, list[Callable]] = {}

    def once(self, event: str, callback: Callable) -> None:
        self._once.setdefault(event, []).append(callback)

    def on(self, event: str, callback: Callable) -> None:
        self._on.setdefault(event, []).append(callback)

    def subscribers(self, event: str) -> list[Callable]:
        return self._once.get(event, []) + self._on.get(event, [])

    def call_all(self, event: str, *args: Any) -> None:
        for callback in self._once.pop(event, []):
            callback(*args)
        for callback in list(self._on.get(event, [])):
            callback(*args)


@dataclass
class FakeHost:
    """Host environment exposing the FFG system's dice."""
    system_id: str = "starwarsffg"
    dice_terms: Optional[list] = field(default_factory=lambda: list(make_die_classes().values()))
    result_registry: Optional[dict] = field(default_factory=make_result_registry)

    def localize(self, key: str) -> str:
        return localize(key)


def term_class(host: FakeHost, denom: str) -> type:
    """Find the host die term class for a denomination."""
    return next(cls for cls in host.dice_terms if cls.DENOMINATION == denom)
