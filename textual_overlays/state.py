"""Observable state container used by the store."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar, overload
from weakref import WeakSet

from pydantic import BaseModel
from textual.message import Message
from textual.widget import Widget

T = TypeVar("T")


class StateChanged(Message, Generic[T]):
    """Message posted when state changes."""

    def __init__(self, state: State[T], old_value: T, new_value: T) -> None:
        super().__init__()
        self.state = state
        self.old_value = old_value
        self.new_value = new_value


class State(Generic[T]):
    """
    A reactive value container that integrates with Textual's message system.

    Watchers are plain callbacks receiving (old_value, new_value). Subscribed
    widgets receive a StateChanged message instead.

    Example:
        ```python
        state = State(ApplicationState())
        unwatch = state.watch(lambda old, new: print(new.count))
        state.replace(ApplicationState(count=1))
        unwatch()
        ```
    """

    __slots__ = ("_value", "_subscribers", "_watchers", "_name")

    def __init__(self, initial_value: T, *, name: str | None = None) -> None:
        """
        Initialize a new state container.

        Args:
            initial_value: The initial value of the state.
            name: Optional name for debugging purposes.
        """
        self._value: T = initial_value
        self._subscribers: WeakSet[Widget] = WeakSet()
        self._watchers: list[Callable[[T, T], None]] = []
        self._name = name

    @property
    def value(self) -> T:
        """Get the current state value."""
        return self._value

    @property
    def name(self) -> str | None:
        return self._name

    def get(self) -> T:
        """Get the current state value."""
        return self._value

    @overload
    def set(self, value: T, *, force: bool = False) -> None: ...

    @overload
    def set(self, value: Callable[[T], T], *, force: bool = False) -> None: ...

    def set(self, value: T | Callable[[T], T], *, force: bool = False) -> None:
        """
        Set the state value.

        Args:
            value: Either a new value or a function that takes the current
                   value and returns the new value.
            force: Notify even if the new value equals the current one.
        """
        if callable(value):
            new_value = value(self._value)
        else:
            new_value = value
        self._set_value(new_value, force=force)

    def replace(self, new_value: T, *, force: bool = False) -> None:
        """
        Replace the value without treating it as an updater function.

        Args:
            new_value: The new value.
            force: Notify even if the new value equals the current one.
        """
        self._set_value(new_value, force=force)

    def _set_value(self, new_value: T, *, force: bool = False) -> None:
        """Internal method to set value and notify subscribers."""
        old_value = self._value

        if not force and _same(old_value, new_value):
            return

        self._value = new_value

        # Copy so watchers may unwatch while being notified
        for watcher in list(self._watchers):
            watcher(old_value, new_value)

        message = StateChanged(self, old_value, new_value)
        for widget in list(self._subscribers):
            widget.post_message(message)

    def subscribe(self, widget: Widget) -> None:
        """
        Subscribe a widget to state changes.

        The widget will receive StateChanged messages when the state changes.

        Args:
            widget: The widget to subscribe.
        """
        self._subscribers.add(widget)

    def unsubscribe(self, widget: Widget) -> None:
        """
        Unsubscribe a widget from state changes.

        Args:
            widget: The widget to unsubscribe.
        """
        self._subscribers.discard(widget)

    def watch(self, callback: Callable[[T, T], None]) -> Callable[[], None]:
        """
        Add a watcher callback for state changes.

        Args:
            callback: A function that receives (old_value, new_value).

        Returns:
            A function to remove the watcher. Calling it more than once is a no-op.
        """
        self._watchers.append(callback)
        removed = False

        def unwatch() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            self._watchers.remove(callback)

        return unwatch

    def __repr__(self) -> str:
        name = f" name={self._name!r}" if self._name else ""
        return f"State({self._value!r}{name})"


def _same(old_value: object, new_value: object) -> bool:
    # For Pydantic models, compare by dict representation
    if isinstance(old_value, BaseModel) and isinstance(new_value, BaseModel):
        return type(old_value) is type(new_value) and (
            old_value.model_dump() == new_value.model_dump()
        )
    return old_value == new_value
