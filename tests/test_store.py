"""Tests for Store and @effect."""

from unittest.mock import MagicMock

import pytest

from textual_overlays import (
    DISMISSED,
    Action,
    ApplicationState,
    Settings,
    alert_and_sheet_reducer,
    create_alert_and_sheet_store,
    create_store,
    effect,
    use_store,
)
from textual_overlays.effects import get_effect_registration
from textual_overlays.store import Store, StoreHandle, StoreNotFoundError, StoreProvider


class BaseMockWidget:
    """Base mock widget with post_message."""

    parent = None

    def post_message(self, message):
        pass


@pytest.fixture
def store() -> Store[ApplicationState, Action]:
    return create_alert_and_sheet_store(Settings())


class TestCreateStore:
    """Tests for create_store."""

    def test_creates_store(self):
        store = create_store(alert_and_sheet_reducer, ApplicationState())

        assert isinstance(store, Store)
        assert store._reducer is alert_and_sheet_reducer
        assert store.current() == ApplicationState()

    def test_store_with_name(self):
        store = create_store(alert_and_sheet_reducer, ApplicationState(), name="overlays")

        assert store.name == "overlays"

    def test_alert_and_sheet_store_uses_settings(self):
        store = create_alert_and_sheet_store(
            Settings(initial_count=7, notify_unchanged=False)
        )

        assert store.current() == ApplicationState(count=7)
        assert store.name == "alert_and_sheet"
        assert store._notify_unchanged is False


class TestDispatch:
    """Tests for dispatch, subscribe and current."""

    def test_dispatch_replaces_state(self, store):
        store.dispatch(Action.INCREMENT)
        store.dispatch(Action.INCREMENT)

        assert store.current().count == 2
        assert store.value == store.current()

    def test_subscriber_receives_old_and_new(self, store):
        changes = []
        store.subscribe(lambda old, new: changes.append((old, new)))

        store.dispatch(Action.SHOW_ALERT)

        [(old, new)] = changes
        assert old == ApplicationState()
        assert new.alert.is_shown

    def test_notifies_on_unchanged_state(self, store):
        changes = []
        store.subscribe(lambda old, new: changes.append((old, new)))

        store.dispatch(Action.CANCEL_ALERT)

        assert changes == [(ApplicationState(), ApplicationState())]

    def test_can_skip_unchanged_notifications(self):
        store = create_store(
            alert_and_sheet_reducer, ApplicationState(), notify_unchanged=False
        )
        changes = []
        store.subscribe(lambda old, new: changes.append(new))

        store.dispatch(Action.CANCEL_ALERT)
        store.dispatch(Action.INCREMENT)

        assert changes == [ApplicationState(count=1)]

    def test_unsubscribe(self, store):
        changes = []
        unsubscribe = store.subscribe(lambda old, new: changes.append(new.count))

        store.dispatch(Action.INCREMENT)
        unsubscribe()
        unsubscribe()
        store.dispatch(Action.INCREMENT)

        assert changes == [1]

    def test_current_is_immutable_snapshot(self, store):
        snapshot = store.current()

        store.dispatch(Action.INCREMENT)

        assert snapshot.count == 0
        with pytest.raises(Exception):
            snapshot.count = 5

    def test_dispatch_from_subscriber_is_queued(self, store):
        seen = []

        def chain(old, new):
            seen.append(new.count)
            if new.count == 1:
                store.dispatch(Action.INCREMENT)
                # Nested dispatch runs after this callback returns
                assert store.current().count == 1

        store.subscribe(chain)
        store.dispatch(Action.INCREMENT)

        assert seen == [1, 2]
        assert store.current().count == 2

    def test_reducer_error_propagates(self, store):
        with pytest.raises(TypeError):
            store.dispatch("increment")

        assert store.current() == ApplicationState()
        store.dispatch(Action.INCREMENT)
        assert store.current().count == 1

    def test_subscriber_error_drops_queued_actions(self, store):
        def boom(old, new):
            store.dispatch(Action.INCREMENT)
            raise RuntimeError("render failed")

        unsubscribe = store.subscribe(boom)
        with pytest.raises(RuntimeError, match="render failed"):
            store.dispatch(Action.SHOW_ALERT)
        unsubscribe()

        assert store.current().count == 0
        assert store.current().alert.is_shown

    def test_end_to_end_through_store(self, store):
        store.dispatch(Action.SHOW_ACTION_MENU)
        buttons = store.current().action_menu.descriptor.buttons

        assert [b.label for b in buttons] == ["Cancel", "Increment", "Decrement"]

        store.dispatch(buttons[1].action)

        assert store.current() == ApplicationState(
            alert=DISMISSED, action_menu=DISMISSED, count=1
        )

    def test_repr(self, store):
        assert "alert_and_sheet" in repr(store)


class TestEffect:
    """Tests for @effect decorator."""

    def test_marks_method(self):
        class Widget:
            @effect("alert_and_sheet")
            def on_change(self, old, new):
                pass

        reg = get_effect_registration(Widget.on_change)
        assert reg is not None
        assert "alert_and_sheet" in reg.targets

    def test_effect_with_store(self, store):
        class Widget:
            @effect(store)
            def on_store_change(self, old, new):
                pass

        reg = get_effect_registration(Widget.on_store_change)
        assert store in reg.targets
        assert reg.matches(store)

    def test_matches_by_name(self, store):
        class Widget:
            @effect("other", "alert_and_sheet")
            def on_change(self, old, new):
                pass

        reg = get_effect_registration(Widget.on_change)
        assert reg.matches(store)
        assert not reg.matches(create_store(alert_and_sheet_reducer, ApplicationState()))

    def test_effect_requires_target(self):
        with pytest.raises(ValueError, match="requires at least one target"):

            @effect()
            def no_target(self, old, new):
                pass


class TestUse:
    """Tests for consuming a store from a widget tree."""

    def test_use_finds_provider_and_connects_effects(self, store):
        provider = store.provider()
        changes = []

        class MockWidget(BaseMockWidget):
            @effect("alert_and_sheet")
            def on_change(self, old, new):
                changes.append(new.count)

        widget = MockWidget()
        widget.parent = provider

        handle = store.use(widget)

        assert isinstance(handle, StoreHandle)
        assert handle.store is store
        assert widget in store.state._subscribers

        handle.dispatch(Action.INCREMENT)
        assert changes == [1]
        assert handle.value.count == 1
        assert handle().count == 1

    def test_use_store_by_name(self, store):
        provider = StoreProvider(store)
        widget = BaseMockWidget()
        widget.parent = provider

        handle = use_store(widget, "alert_and_sheet", subscribe=False)

        assert handle.store is store
        assert widget not in store.state._subscribers

    def test_use_store_skips_other_names(self, store):
        widget = BaseMockWidget()
        widget.parent = store.provider()

        with pytest.raises(StoreNotFoundError, match="'missing' not found"):
            use_store(widget, "missing")

    def test_use_without_provider(self, store):
        with pytest.raises(StoreNotFoundError, match="MockWidget"):

            class MockWidget(BaseMockWidget):
                pass

            store.use(MockWidget())

    def test_use_with_other_store_provider(self, store):
        other = create_store(alert_and_sheet_reducer, ApplicationState())
        widget = BaseMockWidget()
        widget.parent = other.provider()

        with pytest.raises(RuntimeError):
            store.use(widget)

    def test_provider_dispatch(self, store):
        provider = store.provider()

        provider.dispatch(Action.SHOW_ALERT)

        assert provider.value.alert.is_shown
        assert provider.store is store

    def test_subscribed_widget_gets_message(self, store):
        widget = MagicMock()
        widget.parent = store.provider()

        store.use(widget)
        store.dispatch(Action.INCREMENT)

        widget.post_message.assert_called_once()

    def test_release_disconnects_widget(self, store):
        changes = []

        class MockWidget(BaseMockWidget):
            @effect("alert_and_sheet")
            def on_change(self, old, new):
                changes.append(new.count)

        widget = MockWidget()
        widget.parent = store.provider()
        handle = store.use(widget)

        handle.release()
        handle.release()
        store.dispatch(Action.INCREMENT)

        assert changes == []
        assert widget not in store.state._subscribers
        assert store.state._watchers == []

    def test_release_after_use_twice_keeps_other_handle(self, store):
        changes = []

        class MockWidget(BaseMockWidget):
            @effect("alert_and_sheet")
            def on_change(self, old, new):
                changes.append(new.count)

        first, second = MockWidget(), MockWidget()
        first.parent = second.parent = store.provider()
        store.use(first).release()
        store.use(second)

        store.dispatch(Action.INCREMENT)

        assert changes == [1]
