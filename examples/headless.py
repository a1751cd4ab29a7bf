"""
Headless Example - drives the overlay store without any widgets.

Shows:
- create_alert_and_sheet_store: Build the store
- subscribe: Watch every dispatch
- Tapping overlay buttons by dispatching their actions
- replay: Reproduce the same session from its action log
"""

from textual_overlays import (
    Action,
    ApplicationState,
    Settings,
    create_alert_and_sheet_store,
    replay,
)


def describe(state: ApplicationState) -> str:
    alert = state.alert.descriptor.title if state.alert.is_shown else "-"
    menu = state.action_menu.descriptor.title if state.action_menu.is_shown else "-"
    return f"count={state.count} alert={alert} action_menu={menu}"


def main() -> None:
    store = create_alert_and_sheet_store(Settings())
    log: list[Action] = []

    def record(action: Action) -> None:
        log.append(action)
        store.dispatch(action)

    store.subscribe(lambda old, new: print(describe(new)))

    record(Action.SHOW_ACTION_MENU)
    for button in store.current().action_menu.descriptor.buttons:
        print(f"  [{button.style.value}] {button.label}")

    # Tap "Increment" on the action sheet
    record(store.current().action_menu.descriptor.buttons[1].action)

    record(Action.SHOW_ALERT)
    record(Action.CANCEL_ALERT)

    replayed = replay(log)
    if replayed != store.current():
        raise RuntimeError(f"replay diverged: {describe(replayed)}")
    print("Replayed:", describe(replayed))


if __name__ == "__main__":
    main()
