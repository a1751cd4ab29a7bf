"""
Textual Overlays - alerts and action sheets driven by a reducer.

Every change to what is on screen, including opening and closing overlays,
goes through one reducer. Overlays are plain data (OverlayDescriptor) that a
host turns into real widgets, so the whole flow can be tested without a UI.

Key Features:
- Action: closed set of user intents
- ApplicationState: counter plus the alert and action menu slots
- alert_and_sheet_reducer: pure (state, action) -> state
- Store: dispatch, subscribe, current
- @effect: React to store changes in Textual widgets
- AlertsAndSheetsApp: Textual host that renders the overlays

Example:
    ```python
    from textual_overlays import Action, create_alert_and_sheet_store

    store = create_alert_and_sheet_store()
    store.dispatch(Action.SHOW_ACTION_MENU)
    menu = store.current().action_menu
    [b.label for b in menu.descriptor.buttons]  # ["Cancel", "Increment", "Decrement"]

    store.dispatch(menu.descriptor.buttons[1].action)
    store.current().count  # 1
    ```
"""

# Actions
from .actions import Action

# Overlay data
from .overlay import (
    DISMISSED,
    ApplicationState,
    ButtonStyle,
    Dismissed,
    OverlayButton,
    OverlayDescriptor,
    OverlayKind,
    OverlayState,
    Shown,
)

# Reducer
from .reducer import (
    DISMISS_ACTIONS,
    DISMISS_SETS,
    OVERLAY_DESCRIPTORS,
    UnknownActionError,
    alert_and_sheet_reducer,
    dismiss_action,
    dismiss_set,
    replay,
)

# State primitives
from .state import (
    State,
    StateChanged,
)

# Store
from .store import (
    ALERT_AND_SHEET_STORE,
    Store,
    StoreHandle,
    StoreNotFoundError,
    StoreProvider,
    create_alert_and_sheet_store,
    create_store,
    use_store,
)

# Effects
from .effects import (
    effect,
)

# Configuration
from .config import (
    Settings,
    configure_logging,
    get_settings,
)

# Types
from .types import (
    Reducer,
    StateCallback,
    DispatchFunc,
    Unsubscribe,
)

__version__ = "0.1.0a1"

__all__ = [
    # Actions
    "Action",
    # Overlay data
    "DISMISSED",
    "ApplicationState",
    "ButtonStyle",
    "Dismissed",
    "OverlayButton",
    "OverlayDescriptor",
    "OverlayKind",
    "OverlayState",
    "Shown",
    # Reducer
    "DISMISS_ACTIONS",
    "DISMISS_SETS",
    "OVERLAY_DESCRIPTORS",
    "UnknownActionError",
    "alert_and_sheet_reducer",
    "dismiss_action",
    "dismiss_set",
    "replay",
    # State
    "State",
    "StateChanged",
    # Store
    "ALERT_AND_SHEET_STORE",
    "Store",
    "StoreHandle",
    "StoreNotFoundError",
    "StoreProvider",
    "create_alert_and_sheet_store",
    "create_store",
    "use_store",
    # Effects
    "effect",
    # Configuration
    "Settings",
    "configure_logging",
    "get_settings",
    # Types
    "Reducer",
    "StateCallback",
    "DispatchFunc",
    "Unsubscribe",
]
