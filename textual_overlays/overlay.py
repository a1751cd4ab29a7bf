"""Overlay descriptors and the application state they live in."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action


class ButtonStyle(str, Enum):
    """Visual role of an overlay button."""

    NORMAL = "normal"
    CANCEL = "cancel"
    DESTRUCTIVE = "destructive"


class OverlayKind(str, Enum):
    """The overlay slots held by ApplicationState, valued by field name."""

    ALERT = "alert"
    ACTION_MENU = "action_menu"


class OverlayButton(BaseModel):
    """A button shown on an overlay and the action it sends when tapped."""

    model_config = ConfigDict(frozen=True)

    label: str
    action: Action
    style: ButtonStyle = ButtonStyle.NORMAL


class OverlayDescriptor(BaseModel):
    """
    Everything a host needs to draw an overlay.

    Attributes:
        title: Overlay heading.
        message: Optional body text.
        buttons: Buttons in display order.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    message: str | None = None
    buttons: tuple[OverlayButton, ...] = ()

    @property
    def actions(self) -> frozenset[Action]:
        """Actions this overlay can send through its buttons."""
        return frozenset(button.action for button in self.buttons)


class Dismissed(BaseModel):
    """Overlay is not visible."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["dismissed"] = "dismissed"

    @property
    def is_shown(self) -> bool:
        return False


class Shown(BaseModel):
    """Overlay is visible with the given descriptor."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["shown"] = "shown"
    descriptor: OverlayDescriptor

    @property
    def is_shown(self) -> bool:
        return True


OverlayState = Annotated[Union[Dismissed, Shown], Field(discriminator="kind")]

DISMISSED = Dismissed()


class ApplicationState(BaseModel):
    """
    The whole state of the alerts and action sheets screen.

    The two overlay slots are independent, so both may be shown at once.
    """

    model_config = ConfigDict(frozen=True)

    alert: OverlayState = DISMISSED
    action_menu: OverlayState = DISMISSED
    count: int = 0

    def overlay(self, kind: OverlayKind) -> Dismissed | Shown:
        """Get the overlay slot for a kind."""
        return getattr(self, kind.value)
