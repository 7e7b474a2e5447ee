# uiauto_tree/events.py
"""
@file events.py
@brief Simulates user events by invoking handler props on tree nodes.
"""

from __future__ import annotations
import re
import time
from typing import Any, Callable, Optional, Tuple

from .actionlogger import ACTION_LOGGER
from .config import QuerySettings, TreeConfig

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_handler_name(event_name: str, prefix: str = "on_") -> str:
    """
    Map an event name to its handler prop.

    "press" -> "on_press", "changeText" and "change_text" -> "on_change_text".
    """
    snake = _CAMEL_BOUNDARY.sub("_", event_name).lower()
    return f"{prefix}{snake}"


def find_event_handler(
    node: Any,
    event_name: str,
    settings: Optional[QuerySettings] = None,
) -> Optional[Tuple[Any, Callable[..., Any]]]:
    """
    Find the handler for an event on a node or its closest ancestor.

    @param node Target tree node
    @param event_name Event name, e.g. "press"
    @param settings Query conventions (current config when None)
    @return (owning node, handler) or None when nothing handles the event
    """
    settings = settings or TreeConfig.current().query
    prop = to_handler_name(event_name, settings.handler_prefix)

    current = node
    while current is not None:
        handler = current.props.get(prop)
        if callable(handler):
            return current, handler
        current = getattr(current, "parent", None)
    return None


def _describe(node: Any) -> str:
    name = getattr(node, "name", None)
    return name if name else type(node).__name__


class FireEvent:
    """
    Event dispatcher.

    Calling the instance dispatches an arbitrary event; press, change_text
    and scroll are shortcuts for the common ones. Dispatch never waits for
    a re-render to settle.
    """

    def __call__(self, node: Any, event_name: str, *data: Any) -> Any:
        """
        Invoke the handler for event_name with data.

        @param node Target tree node
        @param event_name Event name, e.g. "press" or "change_text"
        @param data Positional arguments passed to the handler
        @return The handler's return value, or None when no handler exists
        """
        settings = TreeConfig.current().query
        prop = to_handler_name(event_name, settings.handler_prefix)
        found = find_event_handler(node, event_name, settings)
        if found is None:
            ACTION_LOGGER.log(
                action="fire_event",
                node=_describe(node),
                status="noop",
                metadata={"event": event_name, "handler": prop},
            )
            return None

        owner, handler = found
        start_time = time.time()
        try:
            result = handler(*data)
        except Exception as exc:
            ACTION_LOGGER.log(
                action="fire_event",
                node=_describe(owner),
                status="error",
                duration_ms=int((time.time() - start_time) * 1000),
                metadata={"event": event_name, "handler": prop},
                exception=exc,
            )
            raise

        ACTION_LOGGER.log(
            action="fire_event",
            node=_describe(owner),
            status="ok",
            duration_ms=int((time.time() - start_time) * 1000),
            metadata={"event": event_name, "handler": prop, "bubbled": owner is not node},
        )
        return result

    def press(self, node: Any, *data: Any) -> Any:
        return self(node, "press", *data)

    def change_text(self, node: Any, *data: Any) -> Any:
        return self(node, "change_text", *data)

    def scroll(self, node: Any, *data: Any) -> Any:
        return self(node, "scroll", *data)


fire_event = FireEvent()
