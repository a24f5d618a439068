"""
Karmic Dice module lifecycle for the Foundry VTT host.

Wires the pipeline into the host's hooks:
- init: log only, the module stays idle until ready
- ready: check the host runs the FFG system, install roll interceptors on
  every die term class and subscribe the chat annotation hook
- preCreateChatMessage: annotate messages whose dice were adjusted

Usage:
    module = KarmicDiceModule(host=game, hooks=Hooks)
    module.register()
"""

from __future__ import annotations

import logging
from typing import Optional

from karmic_dice.config import KarmicDiceConfig, setup_logging
from karmic_dice.integrations.foundry.chat_hook import ChatAnnotationHook
from karmic_dice.integrations.foundry.host_types import (
    INIT_EVENT,
    PRE_CREATE_CHAT_MESSAGE_EVENT,
    READY_EVENT,
    HookRegistry,
    HostEnvironment,
)
from karmic_dice.interception.roll_interceptor import RollInterceptor
from karmic_dice.ledger.karma_ledger import KarmaLedger, get_ledger
from karmic_dice.policy.karma_policy import IdentityPolicy, KarmaPolicy
from karmic_dice.summary.summary_builder import SummaryRenderer
from karmic_dice.tables.result_tables import ResultTableResolver

logger = logging.getLogger(__name__)


class KarmicDiceModule:
    """
    Owns the pipeline components and their activation on the host.

    The ledger and policy can be injected; by default the process-wide
    ledger and the identity policy are used.
    """

    def __init__(
        self,
        host: HostEnvironment,
        hooks: HookRegistry,
        config: Optional[KarmicDiceConfig] = None,
        ledger: Optional[KarmaLedger] = None,
        policy: Optional[KarmaPolicy] = None,
    ):
        self.host = host
        self.hooks = hooks
        self.config = config or KarmicDiceConfig()
        self.ledger = ledger or get_ledger()
        self.policy = policy or IdentityPolicy()

        self.interceptor: Optional[RollInterceptor] = None
        self.chat_hook: Optional[ChatAnnotationHook] = None
        self._active = False

    @property
    def active(self) -> bool:
        """Whether interceptors are installed and the chat hook is subscribed."""
        return self._active

    def register(self) -> None:
        """Subscribe to the host's one-time lifecycle events."""
        self.hooks.once(INIT_EVENT, self.on_init)
        self.hooks.once(READY_EVENT, self.on_ready)

    def on_init(self, *args) -> None:
        setup_logging(self.config.verbose)
        logger.info(f"{self.config.module_id} | Initializing Karmic Dice infrastructure (no karma rules yet).")

    def on_ready(self, *args) -> bool:
        """
        Activate the pipeline if the host runs the expected system.

        Returns:
            True if the module is active after the call
        """
        if self._active:
            return True

        try:
            if not self._system_matches():
                logger.warning(
                    f"{self.config.module_id} | Not running in Star Wars FFG system "
                    f"(found '{getattr(self.host, 'system_id', None)}'); Karmic Dice will be idle."
                )
                return False

            resolver = self._build_resolver()
            self.interceptor = RollInterceptor(
                ledger=self.ledger,
                policy=self.policy,
                resolver=resolver,
                config=self.config,
            )
            self.interceptor.install_all(getattr(self.host, "dice_terms", None))

            # The host has no unsubscribe; a reactivated module keeps its first hook
            if self.chat_hook is None:
                self.chat_hook = ChatAnnotationHook(
                    renderer=SummaryRenderer(resolver, self.config.no_adjustments_text),
                    config=self.config,
                )
                self.hooks.on(PRE_CREATE_CHAT_MESSAGE_EVENT, self.chat_hook)
            self._active = True
            logger.info(f"{self.config.module_id} | Karmic Dice ready. Dice rolls are now intercepted and tracked.")
        except Exception as e:
            logger.error(f"{self.config.module_id} | Error during ready initialization: {e}", exc_info=True)

        return self._active

    def deactivate(self) -> None:
        """
        Remove roll interceptors.

        The chat hook stays subscribed and is reused by the next on_ready().
        With no interceptors installed it finds no adjustments to annotate.
        """
        if self.interceptor is not None:
            self.interceptor.uninstall_all()
        self._active = False

    def _system_matches(self) -> bool:
        return getattr(self.host, "system_id", None) == self.config.expected_system_id

    def _build_resolver(self) -> ResultTableResolver:
        return ResultTableResolver(
            registry=getattr(self.host, "result_registry", None),
            localize=getattr(self.host, "localize", None),
        )
