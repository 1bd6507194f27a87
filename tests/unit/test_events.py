"""Tests for lifecycle events and the event manager"""

from sentry_bridge.core.events import Event, EventManager


class TestEventManager:
    """Test listener registration and dispatch"""

    def test_dispatch_calls_listeners_in_order(self, event_manager):
        calls = []
        event_manager.on("demo", lambda event: calls.append("first"))
        event_manager.on("demo", lambda event: calls.append("second"))

        event_manager.dispatch(Event("demo"))

        assert calls == ["first", "second"]

    def test_only_matching_listeners_called(self, event_manager):
        calls = []
        event_manager.on("demo", lambda event: calls.append(event.name))
        event_manager.on("other", lambda event: calls.append(event.name))

        event_manager.dispatch(Event("demo"))

        assert calls == ["demo"]

    def test_listener_receives_subject_and_data(self, event_manager):
        seen = {}

        def listener(event):
            seen["subject"] = event.subject
            seen["value"] = event.get_data("value")

        event_manager.on("demo", listener)
        subject = object()
        event_manager.dispatch(Event("demo", subject, {"value": 42}))

        assert seen == {"subject": subject, "value": 42}

    def test_listener_can_modify_data(self, event_manager):
        event_manager.on("demo", lambda event: event.data.update(extra="added"))

        event = event_manager.dispatch(Event("demo", data={"extra": None}))

        assert event.get_data("extra") == "added"

    def test_return_value_stored_as_result(self, event_manager):
        event_manager.on("demo", lambda event: "handled")

        assert event_manager.dispatch(Event("demo")).result == "handled"

    def test_stop_propagation(self, event_manager):
        calls = []

        def stopper(event):
            calls.append("stopper")
            event.stop_propagation()

        event_manager.on("demo", stopper)
        event_manager.on("demo", lambda event: calls.append("late"))

        event = event_manager.dispatch(Event("demo"))

        assert calls == ["stopper"]
        assert event.is_stopped

    def test_failing_listener_does_not_stop_dispatch(self, event_manager):
        calls = []

        def broken(event):
            raise RuntimeError("listener bug")

        event_manager.on("demo", broken)
        event_manager.on("demo", lambda event: calls.append("after"))

        event_manager.dispatch(Event("demo"))

        assert calls == ["after"]

    def test_off_removes_one_listener(self, event_manager):
        def first(event):
            pass

        def second(event):
            pass

        event_manager.on("demo", first)
        event_manager.on("demo", second)
        event_manager.off("demo", first)

        assert event_manager.listeners("demo") == [second]

    def test_off_removes_all_listeners(self, event_manager):
        event_manager.on("demo", lambda event: None)
        event_manager.off("demo")

        assert event_manager.listeners("demo") == []

    def test_off_unknown_listener_is_noop(self, event_manager):
        event_manager.off("demo", lambda event: None)
        assert event_manager.listeners("demo") == []

    def test_default_instance_is_shared(self):
        assert EventManager.instance() is EventManager.instance()

    def test_reset_instance(self):
        first = EventManager.instance()
        EventManager.reset_instance()
        assert EventManager.instance() is not first
