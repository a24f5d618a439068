"""
Host-side interfaces consumed by Karmic Dice.

The host platform (Foundry VTT running the Star Wars FFG system) owns the
die term classes, the symbol registry, localization and hook dispatch.
These protocols describe the parts of it this module touches.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Protocol, Sequence


# Host lifecycle events
INIT_EVENT = "init"
READY_EVENT = "ready"
PRE_CREATE_CHAT_MESSAGE_EVENT = "preCreateChatMessage"


class HostEnvironment(Protocol):
    """The host state read during activation."""

    # Identifier of the currently loaded ruleset, e.g. "starwarsffg"
    system_id: str
    # Die term classes, each with DENOMINATION, faces and async roll()
    dice_terms: Optional[Sequence[type]]
    # Denomination result tables keyed ABILITY_RESULTS, BOOST_RESULTS, ...
    result_registry: Optional[Mapping[str, Any]]

    def localize(self, key: str) -> str:
        ...


class HookRegistry(Protocol):
    """Host hook dispatch."""

    def once(self, event: str, callback: Callable[..., Any]) -> Any:
        ...

    def on(self, event: str, callback: Callable[..., Any]) -> Any:
        ...
