"""Store - owns the state and the reducer, the only place state changes."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Generic, Iterable, TypeVar

from textual.containers import Container
from textual.widget import Widget

from .actions import Action
from .config import Settings, get_settings
from .effects import connect_store_effects
from .overlay import ApplicationState
from .reducer import alert_and_sheet_reducer
from .state import State
from .types import Reducer, StateCallback, Unsubscribe

logger = logging.getLogger(__name__)

ALERT_AND_SHEET_STORE = "alert_and_sheet"

T = TypeVar("T")
A = TypeVar("A")


class StoreNotFoundError(RuntimeError):
    """Raised when no StoreProvider is mounted above a widget."""

    def __init__(self, name: str | None, widget: Widget) -> None:
        self.name = name
        self.widget = widget
        super().__init__(
            f"Store '{name or 'unnamed'}' not found in widget tree. "
            f"Make sure a provider is mounted above {widget.__class__.__name__}."
        )


class Store(Generic[T, A]):
    """
    Holds the current state and applies actions to it through the reducer.

    Subscribers are notified after every dispatch, including dispatches that
    leave the state unchanged, unless notify_unchanged is False. Dispatching
    from inside a subscriber is queued and runs after the current dispatch.

    The store is not thread-safe. Dispatch from the UI thread only.

    Usage:
        ```python
        store = create_store(alert_and_sheet_reducer, ApplicationState())
        unsubscribe = store.subscribe(lambda old, new: print(new.count))
        store.dispatch(Action.INCREMENT)
        store.current().count  # 1
        unsubscribe()
        ```
    """

    __slots__ = (
        "_reducer",
        "_state",
        "_name",
        "_notify_unchanged",
        "_pending",
        "_dispatching",
    )

    def __init__(
        self,
        reducer: Reducer[T, A],
        initial: T,
        *,
        name: str | None = None,
        notify_unchanged: bool = True,
    ) -> None:
        self._reducer = reducer
        self._state: State[T] = State(initial, name=name)
        self._name = name
        self._notify_unchanged = notify_unchanged
        self._pending: deque[A] = deque()
        self._dispatching = False

    @property
    def name(self) -> str | None:
        """Get store name."""
        return self._name

    @property
    def state(self) -> State[T]:
        """Get the underlying state (for widgets and advanced use)."""
        return self._state

    @property
    def value(self) -> T:
        """Get the current state value."""
        return self._state.value

    def current(self) -> T:
        """Get a snapshot of the current state."""
        return self._state.value

    def dispatch(self, action: A) -> None:
        """
        Apply an action and notify subscribers.

        Args:
            action: The action to reduce.

        Raises:
            Whatever the reducer or a subscriber raises. Queued actions are
            dropped when that happens.
        """
        self._pending.append(action)
        if self._dispatching:
            logger.debug("Store %s queued %r", self._label, action)
            return

        self._dispatching = True
        try:
            while self._pending:
                self._apply(self._pending.popleft())
        finally:
            self._pending.clear()
            self._dispatching = False

    def _apply(self, action: A) -> None:
        old_value = self._state.value
        new_value = self._reducer(old_value, action)
        logger.debug(
            "Store %s reduced %r: %r -> %r", self._label, action, old_value, new_value
        )
        self._state.replace(new_value, force=self._notify_unchanged)

    def subscribe(self, callback: StateCallback[T]) -> Unsubscribe:
        """
        Call callback with (old, new) after each dispatch.

        Returns:
            A function that removes the subscription.
        """
        return self._state.watch(callback)

    @property
    def _label(self) -> str:
        return self._name or "unnamed"

    def provider(
        self,
        *children: Widget,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> StoreProvider[T, A]:
        """
        Create a provider widget for this store.

        Args:
            *children: Child widgets.
            name: Widget name.
            id: Widget ID.
            classes: CSS classes.

        Returns:
            A StoreProvider widget.
        """
        return StoreProvider(self, *children, name=name, id=id, classes=classes)

    def use(self, widget: Widget, *, subscribe: bool = True) -> StoreHandle[T, A]:
        """
        Consume this store from a widget.

        Finds the nearest provider of this store in the widget tree.

        Args:
            widget: The widget consuming the store.
            subscribe: Whether to subscribe to changes (default True).

        Returns:
            A StoreHandle with .value and .dispatch().

        Raises:
            StoreNotFoundError: If no provider is found in the widget tree.
        """
        provider = _find_provider(widget, lambda store: store is self)
        if provider is None:
            raise StoreNotFoundError(self._name, widget)
        return _bind(widget, self, subscribe=subscribe)

    def __repr__(self) -> str:
        return f"Store({self._label!r}, {self._state.value!r})"


class StoreHandle(Generic[T, A]):
    """
    Handle returned by Store.use() - provides access to state and dispatch.

    Keeps the subscriptions made for its widget so release() can undo them
    when the widget goes away.
    """

    __slots__ = ("_store", "_widget", "_unsubscribers")

    def __init__(
        self,
        store: Store[T, A],
        widget: Widget | None = None,
        unsubscribers: Iterable[Unsubscribe] = (),
    ) -> None:
        self._store = store
        self._widget = widget
        self._unsubscribers = list(unsubscribers)

    @property
    def value(self) -> T:
        """Get the current state value."""
        return self._store.value

    def dispatch(self, action: A) -> None:
        """Dispatch an action to the store."""
        self._store.dispatch(action)

    @property
    def state(self) -> State[T]:
        """Get the underlying state."""
        return self._store.state

    @property
    def store(self) -> Store[T, A]:
        """Get the store this handle belongs to."""
        return self._store

    def release(self) -> None:
        """Disconnect effects and stop posting messages to the widget."""
        while self._unsubscribers:
            self._unsubscribers.pop()()
        if self._widget is not None:
            self._store.state.unsubscribe(self._widget)
            self._widget = None

    def __call__(self) -> T:
        """Shorthand to get current value."""
        return self._store.value


class StoreProvider(Container, Generic[T, A]):
    """Widget that provides a store to its descendants."""

    DEFAULT_CSS = """
    StoreProvider {
        width: 100%;
        height: auto;
    }
    """

    def __init__(
        self,
        store: Store[T, A],
        *children: Widget,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._store = store
        self._compose_children = children

    @property
    def store(self) -> Store[T, A]:
        return self._store

    @property
    def value(self) -> T:
        """Get current state value."""
        return self._store.value

    def dispatch(self, action: A) -> None:
        """Dispatch an action."""
        self._store.dispatch(action)

    def compose(self):
        yield from self._compose_children


def use_store(
    widget: Widget, name: str | None = None, *, subscribe: bool = True
) -> StoreHandle[Any, Any]:
    """
    Consume the nearest store provided above a widget.

    Args:
        widget: The widget consuming the store.
        name: Only match a store with this name. Any store matches if None.
        subscribe: Whether to subscribe to changes (default True).

    Returns:
        A StoreHandle for the matching store.

    Raises:
        StoreNotFoundError: If no matching provider is found.
    """
    provider = _find_provider(
        widget, lambda store: name is None or store.name == name
    )
    if provider is None:
        raise StoreNotFoundError(name, widget)
    return _bind(widget, provider.store, subscribe=subscribe)


def _bind(
    widget: Widget, store: Store[T, A], *, subscribe: bool
) -> StoreHandle[T, A]:
    if subscribe:
        store.state.subscribe(widget)

    # Connect @effect decorated methods for this store
    unsubscribers = connect_store_effects(widget, store)

    return StoreHandle(store, widget if subscribe else None, unsubscribers)


def _find_provider(widget: Widget, matches) -> StoreProvider[Any, Any] | None:
    """Find the nearest provider whose store satisfies matches."""
    current: Widget | None = widget

    while current is not None:
        if isinstance(current, StoreProvider) and matches(current.store):
            return current

        if getattr(current, "parent", None) is not None:
            current = current.parent
        else:
            break

    return None


def create_store(
    reducer: Reducer[T, A],
    initial: T,
    *,
    name: str | None = None,
    notify_unchanged: bool | None = None,
) -> Store[T, A]:
    """
    Create a new store.

    Args:
        reducer: Function (state, action) -> new_state.
        initial: Initial state value.
        name: Optional name for debugging and use_store lookup.
        notify_unchanged: Notify when a dispatch leaves the state equal.
            Defaults to the configured setting.

    Returns:
        A Store instance.
    """
    if notify_unchanged is None:
        notify_unchanged = get_settings().notify_unchanged
    return Store(reducer, initial, name=name, notify_unchanged=notify_unchanged)


def create_alert_and_sheet_store(
    settings: Settings | None = None,
) -> Store[ApplicationState, Action]:
    """Create the store for the alerts and action sheets screen."""
    settings = settings or get_settings()
    return Store(
        alert_and_sheet_reducer,
        ApplicationState(count=settings.initial_count),
        name=ALERT_AND_SHEET_STORE,
        notify_unchanged=settings.notify_unchanged,
    )
