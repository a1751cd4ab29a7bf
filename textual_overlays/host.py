"""
Alerts & Action Sheets - a Textual host for the overlay store.

Overlays are never opened or closed by the widgets themselves. Buttons
dispatch actions, and the view pushes or pops overlay screens to match
whatever the store says after each dispatch.
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Label, Static

from .actions import Action
from .config import Settings, configure_logging, get_settings
from .effects import effect
from .overlay import ApplicationState, ButtonStyle, OverlayDescriptor, OverlayKind
from .reducer import dismiss_action
from .store import (
    ALERT_AND_SHEET_STORE,
    Store,
    StoreHandle,
    create_alert_and_sheet_store,
    use_store,
)
from .types import DispatchFunc

logger = logging.getLogger(__name__)

README = (
    "All state flows through a single reducer, so alerts and action sheets "
    "are described as state instead of being opened imperatively. Tapping a "
    "button sends an action, and the reducer decides which overlays close. "
    "Press Escape to dismiss the open overlay."
)

BUTTON_VARIANTS: dict[ButtonStyle, str] = {
    ButtonStyle.NORMAL: "default",
    ButtonStyle.CANCEL: "primary",
    ButtonStyle.DESTRUCTIVE: "error",
}


class OverlayScreen(ModalScreen[None]):
    """Modal screen drawn from an OverlayDescriptor."""

    DEFAULT_CSS = """
    OverlayScreen {
        align: center middle;
    }

    #overlay-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #overlay-title {
        width: 100%;
        text-style: bold;
        content-align: center middle;
    }

    #overlay-message {
        width: 100%;
        margin: 1 0;
    }

    #overlay-buttons {
        width: 100%;
        height: auto;
        align: center middle;
    }

    #overlay-buttons Button {
        margin: 0 1;
    }
    """

    BINDINGS = [("escape", "dismiss_overlay", "Dismiss")]

    def __init__(
        self,
        kind: OverlayKind,
        descriptor: OverlayDescriptor,
        dispatch: DispatchFunc[Action],
    ) -> None:
        super().__init__()
        self.kind = kind
        self.descriptor = descriptor
        self._dispatch = dispatch

    def compose(self) -> ComposeResult:
        with Vertical(id="overlay-dialog"):
            yield Label(self.descriptor.title, id="overlay-title")
            if self.descriptor.message is not None:
                yield Static(self.descriptor.message, id="overlay-message")
            with Horizontal(id="overlay-buttons"):
                for index, button in enumerate(self.descriptor.buttons):
                    yield Button(
                        button.label,
                        id=f"overlay-button-{index}",
                        variant=BUTTON_VARIANTS[button.style],
                    )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        index = int(event.button.id.rsplit("-", 1)[1])
        self._dispatch(self.descriptor.buttons[index].action)

    def action_dismiss_overlay(self) -> None:
        self._dispatch(dismiss_action(self.kind))


class AlertAndSheetView(Container):
    """Counter plus the buttons that open each overlay."""

    DEFAULT_CSS = """
    AlertAndSheetView {
        width: 100%;
        height: auto;
        padding: 1 2;
    }

    #count {
        width: 100%;
        height: 3;
        text-style: bold;
        content-align: center middle;
        background: $primary;
    }

    #open-buttons {
        width: 100%;
        height: auto;
        align: center middle;
        margin: 1 0;
    }

    #open-buttons Button {
        margin: 0 1;
    }

    #readme {
        color: $text-muted;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._screens: dict[OverlayKind, OverlayScreen] = {}

    def compose(self) -> ComposeResult:
        yield Static("Count: 0", id="count")
        with Horizontal(id="open-buttons"):
            yield Button("Alert", id="show-alert")
            yield Button("Action sheet", id="show-action-sheet")
        yield Static(README, id="readme")

    def on_mount(self) -> None:
        self.counter: StoreHandle[ApplicationState, Action] = use_store(
            self, ALERT_AND_SHEET_STORE
        )
        self._render_state(self.counter.value)

    def on_unmount(self) -> None:
        self.counter.release()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "show-alert":
                self.counter.dispatch(Action.SHOW_ALERT)
            case "show-action-sheet":
                self.counter.dispatch(Action.SHOW_ACTION_MENU)

    @effect(ALERT_AND_SHEET_STORE)
    def on_store_change(self, old: ApplicationState, new: ApplicationState) -> None:
        self.log(f"State changed: {old!r} -> {new!r}")
        self._render_state(new)

    def _render_state(self, state: ApplicationState) -> None:
        self.query_one("#count", Static).update(f"Count: {state.count}")
        self._sync_overlays(state)

    def _sync_overlays(self, state: ApplicationState) -> None:
        """Push and pop overlay screens until they match the state."""
        stale = [kind for kind in self._screens if not state.overlay(kind).is_shown]
        stacked = list(self._screens)
        if stale:
            # Screens are stacked in push order; pop down to the lowest stale one
            lowest = min(stacked.index(kind) for kind in stale)
            for kind in reversed(stacked[lowest:]):
                del self._screens[kind]
                self.app.pop_screen()

        # Survivors go back in their old order, new overlays on top
        for kind in [*stacked, *OverlayKind]:
            slot = state.overlay(kind)
            if slot.is_shown and kind not in self._screens:
                screen = OverlayScreen(kind, slot.descriptor, self.counter.dispatch)
                self._screens[kind] = screen
                self.app.push_screen(screen)

    @property
    def open_overlays(self) -> list[OverlayKind]:
        """Overlay kinds currently on screen, bottom to top."""
        return list(self._screens)


class AlertsAndSheetsApp(App):
    """Demo app driving alerts and action sheets from a store."""

    TITLE = "Alerts & Action Sheets"

    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, store: Store[ApplicationState, Action] | None = None) -> None:
        super().__init__()
        self.overlay_store = store if store is not None else create_alert_and_sheet_store()

    def compose(self) -> ComposeResult:
        yield Header()
        yield self.overlay_store.provider(AlertAndSheetView(id="view"))
        yield Footer()


def main(settings: Settings | None = None) -> None:
    """Run the demo app."""
    settings = settings or get_settings()
    configure_logging(settings)
    logger.info("Starting with initial count %d", settings.initial_count)
    AlertsAndSheetsApp(create_alert_and_sheet_store(settings)).run()


if __name__ == "__main__":
    main()
