"""Type definitions for textual-overlays."""

from typing import Protocol, TypeVar

# Type variables
T = TypeVar("T")
A = TypeVar("A")  # Action type


class Reducer(Protocol[T, A]):
    """Protocol for reducer functions."""

    def __call__(self, state: T, action: A) -> T:
        """Process an action and return new state."""
        ...


class StateCallback(Protocol[T]):
    """Protocol for state change callbacks."""

    def __call__(self, old_value: T, new_value: T) -> None:
        """Called when state changes."""
        ...


class DispatchFunc(Protocol[A]):
    """Protocol for dispatch functions."""

    def __call__(self, action: A) -> None:
        """Dispatch an action to the reducer."""
        ...


class Unsubscribe(Protocol):
    """Protocol for the handle returned by Store.subscribe."""

    def __call__(self) -> None:
        """Stop receiving notifications."""
        ...
