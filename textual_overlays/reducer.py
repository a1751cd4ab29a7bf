"""
Reducer for the alerts and action sheets screen.

Every overlay is described as data in OVERLAY_DESCRIPTORS. An action closes
exactly the overlays whose buttons can send it, so the dismissal rules follow
the button wiring instead of being spelled out per action.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable

from .actions import Action
from .overlay import (
    DISMISSED,
    ApplicationState,
    ButtonStyle,
    OverlayButton,
    OverlayDescriptor,
    OverlayKind,
    Shown,
)


class UnknownActionError(TypeError):
    """Raised when the reducer receives something that is not an Action."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(
            f"Unknown action {action!r} ({type(action).__name__}). "
            f"Expected a member of {Action.__name__}."
        )


OVERLAY_DESCRIPTORS: dict[OverlayKind, OverlayDescriptor] = {
    OverlayKind.ACTION_MENU: OverlayDescriptor(
        title="Action sheet",
        message="This is an action sheet.",
        buttons=(
            OverlayButton(
                label="Cancel",
                action=Action.CANCEL_ACTION_MENU,
                style=ButtonStyle.CANCEL,
            ),
            OverlayButton(label="Increment", action=Action.INCREMENT),
            OverlayButton(label="Decrement", action=Action.DECREMENT),
        ),
    ),
    OverlayKind.ALERT: OverlayDescriptor(
        title="Alert!",
        message="This is an alert",
        buttons=(
            OverlayButton(
                label="Cancel",
                action=Action.CANCEL_ALERT,
                style=ButtonStyle.CANCEL,
            ),
            OverlayButton(label="Increment", action=Action.INCREMENT),
        ),
    ),
}

# Sent by the host when an overlay is closed without tapping a button
DISMISS_ACTIONS: dict[OverlayKind, Action] = {
    OverlayKind.ALERT: Action.CANCEL_ALERT,
    OverlayKind.ACTION_MENU: Action.CANCEL_ACTION_MENU,
}


def dismiss_set(
    action: Action,
    descriptors: dict[OverlayKind, OverlayDescriptor] = OVERLAY_DESCRIPTORS,
) -> frozenset[OverlayKind]:
    """
    Get the overlays an action closes.

    Args:
        action: The action being reduced.
        descriptors: Overlay content to derive the wiring from.

    Returns:
        Every overlay kind whose buttons can send the action.
    """
    return frozenset(
        kind for kind, descriptor in descriptors.items() if action in descriptor.actions
    )


DISMISS_SETS: dict[Action, frozenset[OverlayKind]] = {
    action: dismiss_set(action) for action in Action
}


def dismiss_action(kind: OverlayKind) -> Action:
    """Get the action a host sends when the user closes an overlay directly."""
    return DISMISS_ACTIONS[kind]


def alert_and_sheet_reducer(state: ApplicationState, action: Action) -> ApplicationState:
    """
    Compute the next state.

    Closing an overlay that is already dismissed is a no-op.

    Raises:
        UnknownActionError: If action is not an Action member.
    """
    if not isinstance(action, Action):
        raise UnknownActionError(action)

    update: dict[str, object] = {kind.value: DISMISSED for kind in DISMISS_SETS[action]}

    match action:
        case Action.SHOW_ACTION_MENU:
            update[OverlayKind.ACTION_MENU.value] = Shown(
                descriptor=OVERLAY_DESCRIPTORS[OverlayKind.ACTION_MENU]
            )
        case Action.SHOW_ALERT:
            update[OverlayKind.ALERT.value] = Shown(
                descriptor=OVERLAY_DESCRIPTORS[OverlayKind.ALERT]
            )
        case Action.DECREMENT:
            update["count"] = state.count - 1
        case Action.INCREMENT:
            update["count"] = state.count + 1
        case Action.CANCEL_ALERT | Action.CANCEL_ACTION_MENU:
            pass

    return state.model_copy(update=update)


def replay(
    actions: Iterable[Action],
    initial: ApplicationState | None = None,
) -> ApplicationState:
    """
    Fold a sequence of actions through the reducer.

    Args:
        actions: Actions in dispatch order.
        initial: Starting state, defaults to a fresh ApplicationState.

    Returns:
        The state after the last action.
    """
    start = initial if initial is not None else ApplicationState()
    return reduce(alert_and_sheet_reducer, actions, start)
