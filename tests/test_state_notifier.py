# tests/test_state_notifier.py
"""Unit tests for StateNotifier, Event, and EventType.

Test categories:
- Basic functionality (subscribe, subscribe_all, notify, unsubscribe)
- Failure isolation (listener exceptions, injected logger)
- Snapshot semantics (subscribe/unsubscribe during notify)
- Event immutability (frozen dataclass, MappingProxyType)
"""

import logging
import threading
from types import MappingProxyType

import pytest

from voxelclash.core.state import Event, EventType, StateNotifier


class TestStateNotifier:
    def test_subscribe_and_notify(self) -> None:
        notifier = StateNotifier()
        received: list[Event] = []

        notifier.subscribe(EventType.CELL_CLAIMED, received.append)
        notifier.notify(Event.create(EventType.CELL_CLAIMED, {"index": 13}))

        assert len(received) == 1
        assert received[0].event_type is EventType.CELL_CLAIMED
        assert received[0].payload["index"] == 13

    def test_only_matching_type_is_delivered(self) -> None:
        notifier = StateNotifier()
        turns: list[Event] = []

        notifier.subscribe(EventType.TURN_CHANGED, turns.append)
        notifier.notify(Event.create(EventType.SCORE_CHANGED, {"score": 30}))
        notifier.notify(Event.create(EventType.TURN_CHANGED, {"side": "player"}))

        assert [e.event_type for e in turns] == [EventType.TURN_CHANGED]

    def test_subscribe_all(self) -> None:
        notifier = StateNotifier()
        received: list[EventType] = []

        notifier.subscribe_all(lambda e: received.append(e.event_type))
        for event_type in EventType:
            notifier.notify(Event.create(event_type))

        assert received == list(EventType)

    def test_unsubscribe(self) -> None:
        notifier = StateNotifier()
        received: list[Event] = []

        notifier.subscribe(EventType.GAME_OVER, received.append)
        notifier.unsubscribe(EventType.GAME_OVER, received.append)
        notifier.notify(Event.create(EventType.GAME_OVER))

        assert received == []

    def test_unsubscribe_unknown_is_noop(self) -> None:
        notifier = StateNotifier()
        notifier.unsubscribe(EventType.GAME_RESET, print)

    def test_duplicate_subscribe_ignored(self) -> None:
        notifier = StateNotifier()
        count = 0

        def callback(event: Event) -> None:
            nonlocal count
            count += 1

        notifier.subscribe(EventType.COMBO_CELLS, callback)
        notifier.subscribe(EventType.COMBO_CELLS, callback)
        notifier.notify(Event.create(EventType.COMBO_CELLS))

        assert count == 1

    def test_listener_failure_is_isolated_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        notifier = StateNotifier()
        results: list[str] = []

        def bad_callback(event: Event) -> None:
            raise ValueError("Intentional error")

        notifier.subscribe(EventType.CELL_CLAIMED, bad_callback)
        notifier.subscribe(EventType.CELL_CLAIMED, lambda e: results.append("good"))

        with caplog.at_level(logging.ERROR, logger="voxelclash.core.state.notifier"):
            notifier.notify(Event.create(EventType.CELL_CLAIMED))

        assert results == ["good"]
        assert "bad_callback failed" in caplog.text
        assert "ValueError" in caplog.text

    def test_injected_logger_receives_error(self) -> None:
        messages: list[str] = []
        notifier = StateNotifier(logger=messages.append)

        def bad_callback(event: Event) -> None:
            raise RuntimeError("boom")

        notifier.subscribe(EventType.TURN_CHANGED, bad_callback)
        notifier.notify(Event.create(EventType.TURN_CHANGED))

        assert len(messages) == 1
        assert "turn_changed" in messages[0]
        assert "Traceback" in messages[0]

    def test_failing_injected_logger_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        def broken_logger(msg: str) -> None:
            raise OSError("log sink gone")

        notifier = StateNotifier(logger=broken_logger)
        notifier.subscribe(EventType.GAME_OVER, lambda e: 1 / 0)

        with caplog.at_level(logging.ERROR, logger="voxelclash.core.state.notifier"):
            notifier.notify(Event.create(EventType.GAME_OVER))

        assert "Event error sink failed" in caplog.text
        assert "ZeroDivisionError" in caplog.text

    def test_subscribe_during_notify_applies_next_time(self) -> None:
        notifier = StateNotifier()
        call_order: list[str] = []

        def late_callback(event: Event) -> None:
            call_order.append("late")

        def first_callback(event: Event) -> None:
            call_order.append("first")
            notifier.subscribe(EventType.SCORE_CHANGED, late_callback)

        notifier.subscribe(EventType.SCORE_CHANGED, first_callback)
        notifier.notify(Event.create(EventType.SCORE_CHANGED))
        assert call_order == ["first"]

        call_order.clear()
        notifier.notify(Event.create(EventType.SCORE_CHANGED))
        assert call_order == ["first", "late"]

    def test_concurrent_notify(self) -> None:
        notifier = StateNotifier()
        call_count = 0
        lock = threading.Lock()

        def callback(event: Event) -> None:
            nonlocal call_count
            with lock:
                call_count += 1

        notifier.subscribe(EventType.CELL_CLAIMED, callback)

        def notify_many() -> None:
            for _ in range(50):
                notifier.notify(Event.create(EventType.CELL_CLAIMED))

        threads = [threading.Thread(target=notify_many) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert call_count == 250

    def test_clear_specific_type(self) -> None:
        notifier = StateNotifier()
        received: list[EventType] = []

        notifier.subscribe_all(lambda e: received.append(e.event_type))
        notifier.clear(EventType.GAME_RESET)
        notifier.notify(Event.create(EventType.GAME_RESET))
        notifier.notify(Event.create(EventType.GAME_OVER))

        assert received == [EventType.GAME_OVER]

    def test_clear_all(self) -> None:
        notifier = StateNotifier()
        received: list[Event] = []

        notifier.subscribe_all(received.append)
        notifier.clear()
        notifier.notify(Event.create(EventType.TURN_CHANGED))

        assert received == []


class TestEvent:
    def test_frozen(self) -> None:
        event = Event.create(EventType.GAME_RESET)
        with pytest.raises(AttributeError):
            event.event_type = EventType.GAME_OVER  # type: ignore[misc]

    def test_payload_optional(self) -> None:
        assert Event.create(EventType.GAME_RESET).payload is None

    def test_payload_is_read_only(self) -> None:
        event = Event.create(EventType.SCORE_CHANGED, {"side": "player", "score": 30})
        assert isinstance(event.payload, MappingProxyType)
        with pytest.raises(TypeError):
            event.payload["score"] = 0  # type: ignore[index]

    def test_payload_not_aliased_to_original(self) -> None:
        original = {"index": 4}
        event = Event.create(EventType.CELL_CLAIMED, original)
        original["index"] = 5
        assert event.payload["index"] == 4

    def test_equality(self) -> None:
        event1 = Event(EventType.TURN_CHANGED, MappingProxyType({"side": "player"}))
        event2 = Event(EventType.TURN_CHANGED, MappingProxyType({"side": "player"}))
        assert event1 == event2


class TestEventType:
    def test_all_types_have_string_values(self) -> None:
        for event_type in EventType:
            assert isinstance(event_type.value, str)
            assert event_type.value

    def test_game_event_names(self) -> None:
        assert {e.name for e in EventType} == {
            "CELL_CLAIMED",
            "SCORE_CHANGED",
            "COMBO_CELLS",
            "TURN_CHANGED",
            "GAME_OVER",
            "GAME_RESET",
        }
