"""Foundry VTT integration for Karmic Dice."""

from karmic_dice.integrations.foundry.chat_hook import ChatAnnotationHook
from karmic_dice.integrations.foundry.host_types import (
    INIT_EVENT,
    READY_EVENT,
    PRE_CREATE_CHAT_MESSAGE_EVENT,
    HookRegistry,
    HostEnvironment,
)
from karmic_dice.integrations.foundry.karmic_module import KarmicDiceModule

__all__ = [
    "ChatAnnotationHook",
    "INIT_EVENT",
    "READY_EVENT",
    "PRE_CREATE_CHAT_MESSAGE_EVENT",
    "HookRegistry",
    "HostEnvironment",
    "KarmicDiceModule",
]
