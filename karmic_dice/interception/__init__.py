"""Roll interception for host die term classes."""

from karmic_dice.interception.roll_interceptor import (
    RollInterceptor,
    RollFunction,
    term_denomination,
)

__all__ = [
    "RollInterceptor",
    "RollFunction",
    "term_denomination",
]
