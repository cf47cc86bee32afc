from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Action
from .strategies.base import ActionStrategy
from .strategies.checkin_strategy import CheckInStrategy
from .strategies.checkout_strategy import CheckOutStrategy


@dataclass
class ActionStrategyFactory:
    """Factory Pattern: choose the transition strategy for an action."""

    def for_action(self, action: Action) -> ActionStrategy:
        if action == Action.CHECK_IN:
            return CheckInStrategy()
        if action == Action.CHECK_OUT:
            return CheckOutStrategy()
        raise ValueError(f"No strategy for action {action!r}")
