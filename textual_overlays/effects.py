"""Effect decorator for watching store changes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, TypeVar

if TYPE_CHECKING:
    from .store import Store
    from .types import Unsubscribe

F = TypeVar("F", bound=Callable[..., Any])

# Attribute name to store effect metadata on methods
EFFECT_ATTR = "__textual_overlays_effects__"


class EffectRegistration:
    """Stores effect registration info on a method."""

    __slots__ = ("targets",)

    def __init__(self) -> None:
        self.targets: list[str | Store[Any, Any]] = []

    def add(self, target: str | Store[Any, Any]) -> None:
        self.targets.append(target)

    def matches(self, store: Store[Any, Any]) -> bool:
        """Check whether a store is targeted, by identity or by name."""
        return any(
            target is store
            or (isinstance(target, str) and target == store.name)
            for target in self.targets
        )


def get_effect_registration(method: Callable[..., Any]) -> EffectRegistration | None:
    """Get effect registration from a method, if any."""
    return getattr(method, EFFECT_ATTR, None)


def effect(*targets: str | Store[Any, Any]) -> Callable[[F], F]:
    """
    Decorator to mark a method as an effect that responds to store changes.

    Args:
        *targets: Store names (strings) or Store references to watch.

    Example:
        ```python
        class CounterView(Widget):
            def on_mount(self):
                self.counter = use_store(self, "alert_and_sheet")

            @effect("alert_and_sheet")
            def on_state_change(self, old: ApplicationState, new: ApplicationState):
                self.query_one("#count", Static).update(f"Count: {new.count}")
        ```
    """
    if not targets:
        raise ValueError("@effect requires at least one target")

    def decorator(method: F) -> F:
        registration = get_effect_registration(method)
        if registration is None:
            registration = EffectRegistration()
            setattr(method, EFFECT_ATTR, registration)

        for target in targets:
            registration.add(target)

        return method

    return decorator


def connect_store_effects(widget: Any, store: Store[Any, Any]) -> list[Unsubscribe]:
    """
    Connect effects for a store to a widget.

    Called internally by Store.use() and use_store().

    Args:
        widget: The widget instance.
        store: The Store being used.

    Returns:
        One unsubscribe function per connected effect.
    """
    unsubscribers: list[Unsubscribe] = []

    for attr_name in dir(type(widget)):
        if attr_name.startswith("_"):
            continue

        try:
            # Get from class first to check for effect decorator
            class_attr = getattr(type(widget), attr_name, None)
            if class_attr is None:
                continue

            registration = get_effect_registration(class_attr)
            if registration is None:
                continue

            method = getattr(widget, attr_name)
            if not callable(method):
                continue

            if registration.matches(store):
                unsubscribers.append(
                    store.subscribe(lambda old, new, m=method: m(old, new))
                )
        except (AttributeError, AssertionError, TypeError):
            continue

    return unsubscribers
