"""Actions understood by the alert and action sheet reducer."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """
    User intents that drive the overlay state.

    The set is closed and carries no payload. Members are plain strings so
    they serialize cleanly inside overlay descriptors.
    """

    SHOW_ACTION_MENU = "show_action_menu"
    CANCEL_ACTION_MENU = "cancel_action_menu"
    SHOW_ALERT = "show_alert"
    CANCEL_ALERT = "cancel_alert"
    DECREMENT = "decrement"
    INCREMENT = "increment"

    def __repr__(self) -> str:
        return f"Action.{self.name}"
