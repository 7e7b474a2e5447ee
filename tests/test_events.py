"""
Tests for event dispatch.
"""

import json

import pytest

from uiauto_tree import TreeConfig, fire_event, h, render
from uiauto_tree.actionlogger import ACTION_LOGGER
from uiauto_tree.element import SCROLL_VIEW, TEXT, TEXT_INPUT, VIEW
from uiauto_tree.events import find_event_handler, to_handler_name


class TestHandlerName:
    """Tests for event name to handler prop mapping."""

    def test_simple_name(self):
        assert to_handler_name("press") == "on_press"

    def test_camel_case_name(self):
        assert to_handler_name("changeText") == "on_change_text"

    def test_snake_case_name(self):
        assert to_handler_name("change_text") == "on_change_text"

    def test_custom_prefix(self):
        assert to_handler_name("scroll", prefix="handle_") == "handle_scroll"


class TestFireEvent:
    """Tests for fire_event and its shortcuts."""

    def test_press_invokes_handler(self):
        """Should call the press handler with no arguments."""
        calls = []
        screen = render(h(VIEW, {"test_id": "btn", "on_press": lambda: calls.append("pressed")}))

        fire_event.press(screen.get_by_test_id("btn"))

        assert calls == ["pressed"]

    def test_press_without_handler_is_noop(self):
        """Should not fail when nothing handles the event."""
        screen = render(h(VIEW, None, h(TEXT, {"test_id": "label"}, "Hi")))

        assert fire_event.press(screen.get_by_test_id("label")) is None
        assert fire_event(screen.root, "press") is None

    def test_change_text_passes_value(self):
        """Should pass the new text to the change handler."""
        received = []
        screen = render(h(TEXT_INPUT, {"test_id": "input", "on_change_text": received.append}))

        fire_event.change_text(screen.get_by_test_id("input"), "hello")

        assert received == ["hello"]

    def test_scroll_passes_event_data(self):
        received = []
        screen = render(h(SCROLL_VIEW, {"on_scroll": received.append}))
        event = {"content_offset": {"y": 200}}

        fire_event.scroll(screen.root, event)

        assert received == [event]

    def test_generic_event_name(self):
        """Should dispatch arbitrary events by name."""
        received = []
        screen = render(h(VIEW, {"on_layout": lambda e: received.append(e["width"])}))

        fire_event(screen.root, "layout", {"width": 320})
        fire_event(screen.root, "changeText", "ignored")

        assert received == [320]

    def test_returns_handler_result(self):
        screen = render(h(VIEW, {"on_press": lambda: "done"}))
        assert fire_event.press(screen.root) == "done"

    def test_bubbles_to_ancestor(self):
        """Should use the closest ancestor handler when the node has none."""
        calls = []
        screen = render(h(
            VIEW, {"on_press": lambda: calls.append("outer")},
            h(VIEW, {"on_press": lambda: calls.append("inner")},
              h(TEXT, None, "Tap me")),
        ))

        fire_event.press(screen.get_by_text("Tap me"))

        assert calls == ["inner"]

    def test_handler_exception_propagates(self):
        """Should re-raise handler failures unmodified."""
        boom = ValueError("boom")

        def on_press():
            raise boom

        screen = render(h(VIEW, {"on_press": on_press}))

        with pytest.raises(ValueError) as exc_info:
            fire_event.press(screen.root)
        assert exc_info.value is boom

    def test_ignores_non_callable_handler_prop(self):
        screen = render(h(VIEW, {"on_press": "not a function"}))
        assert fire_event.press(screen.root) is None

    def test_custom_handler_prefix(self):
        calls = []
        screen = render(h(VIEW, {"handle_press": lambda: calls.append(1)}))

        with TreeConfig.override(query={"handler_prefix": "handle_"}):
            fire_event.press(screen.root)

        assert calls == [1]

    def test_press_triggers_rerender(self):
        """Should observe the re-rendered tree through a fresh query."""
        count = {"value": 0}

        def Counter(props):
            return h(
                VIEW, None,
                h(TEXT, {"test_id": "count"}, props["count"]),
                h(VIEW, {"test_id": "increment", "on_press": props["on_press"]}),
            )

        def on_press():
            count["value"] += 1
            screen.update(h(Counter, {"count": count["value"], "on_press": on_press}))

        screen = render(h(Counter, {"count": 0, "on_press": on_press}))
        fire_event.press(screen.get_by_test_id("increment"))

        assert screen.get_by_test_id("count").children == ["1"]
        assert screen.query_by_text("0") is None


class TestFindEventHandler:
    """Tests for handler lookup."""

    def test_returns_owner_and_handler(self):
        def on_press():
            return None

        screen = render(h(VIEW, {"on_press": on_press}, h(TEXT, None, "x")))
        owner, handler = find_event_handler(screen.get_by_text("x"), "press")

        assert owner is screen.root
        assert handler is on_press

    def test_returns_none_when_unhandled(self):
        screen = render(h(VIEW))
        assert find_event_handler(screen.root, "press") is None


class TestEventLogging:
    """Tests for dispatch logging."""

    def test_logs_dispatch_when_enabled(self, capsys):
        screen = render(h(VIEW, {"on_press": lambda: None}))
        ACTION_LOGGER.enable()
        try:
            fire_event.press(screen.root)
            fire_event(screen.root, "scroll")
        finally:
            ACTION_LOGGER.disable()

        out = capsys.readouterr().out
        assert "fire_event" in out
        assert "status=ok" in out
        assert "handler=on_press" in out
        assert "status=noop" in out

    def test_jsonl_error_record_to_file(self, tmp_path, capsys):
        """Should append a JSON record for a failing handler."""
        log_path = tmp_path / "logs" / "actions.jsonl"

        def on_press():
            raise ValueError("boom")

        screen = render(h(VIEW, {"test_id": "btn", "on_press": on_press}))
        ACTION_LOGGER.configure(console=False, file_path=str(log_path), format="jsonl")
        ACTION_LOGGER.enable()
        try:
            with pytest.raises(ValueError):
                fire_event.press(screen.get_by_test_id("btn"))
        finally:
            ACTION_LOGGER.disable()
            ACTION_LOGGER.configure()

        assert capsys.readouterr().out == ""
        lines = log_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1

        record = json.loads(lines[0])
        assert record["action"] == "fire_event"
        assert record["node"] == "View"
        assert record["status"] == "error"
        assert record["event"] == "press"
        assert record["handler"] == "on_press"
        assert record["error"] == "ValueError: boom"

    def test_rejects_unknown_format(self):
        with pytest.raises(ValueError):
            ACTION_LOGGER.configure(format="xml")

    def test_silent_when_disabled(self, capsys):
        screen = render(h(VIEW, {"on_press": lambda: None}))
        fire_event.press(screen.root)
        assert capsys.readouterr().out == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
