# uiauto_tree/debug.py
"""
@file debug.py
@brief Human-readable tree dumps for debugging tests.

Purely observational: nothing here mutates a tree.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .element import Element, display_name, is_component
from .renderer import TestRenderer, TreeNode

_HIDDEN_PROPS = {"children", "key", "ref"}


@dataclass
class ShallowResult:
    """Immediate output of a component, not descended into."""
    output: Any


def shallow(instance: Any) -> ShallowResult:
    """
    Render one level of a tree node or element.

    @param instance TreeNode or Element
    @return ShallowResult whose output is the component's un-expanded return value
    """
    props = dict(instance.props)
    if is_component(instance.type):
        return ShallowResult(output=instance.type(props))
    return ShallowResult(output=Element(instance.type, props))


# --- Formatting ---

def _format_prop(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if callable(value) and not isinstance(value, type):
        name = getattr(value, "__name__", "anonymous")
        return f"{{[Function {name}]}}"
    return f"{{{value!r}}}"


def _flatten(children: Any) -> List[Any]:
    if children is None or isinstance(children, bool):
        return []
    if isinstance(children, (list, tuple)):
        flat: List[Any] = []
        for child in children:
            flat.extend(_flatten(child))
        return flat
    if isinstance(children, (int, float)):
        return [str(children)]
    return [children]


def _format_tag(name: str, props: Dict[str, Any], children: List[Any], level: int) -> List[str]:
    pad = "  " * level
    keys = sorted(k for k in props if k not in _HIDDEN_PROPS)
    lines: List[str] = []

    if keys:
        lines.append(f"{pad}<{name}")
        for key in keys:
            lines.append(f"{pad}  {key}={_format_prop(props[key])}")
        lines.append(f"{pad}>" if children else f"{pad}/>")
    else:
        lines.append(f"{pad}<{name}>" if children else f"{pad}<{name} />")

    if children:
        for child in children:
            lines.extend(_format_lines(child, level + 1))
        lines.append(f"{pad}</{name}>")
    return lines


def _format_lines(value: Any, level: int) -> List[str]:
    pad = "  " * level
    if value is None:
        return [f"{pad}None"]
    if isinstance(value, str):
        return [f"{pad}{value}"]
    if isinstance(value, (list, tuple)):
        lines: List[str] = []
        for item in value:
            lines.extend(_format_lines(item, level))
        return lines
    if isinstance(value, TreeNode):
        return _format_tag(value.name, value.props, list(value.children), level)
    if isinstance(value, Element):
        return _format_tag(display_name(value.type), value.props, _flatten(value.children), level)
    if isinstance(value, dict) and "type" in value:
        return _format_tag(str(value["type"]), value.get("props") or {}, _flatten(value.get("children")), level)
    return [f"{pad}{value!r}"]


def format_tree(value: Any) -> str:
    """
    Format an element, tree node, JSON snapshot or list of them as JSX-like text.
    """
    return "\n".join(_format_lines(value, 0))


def _emit(text: str, message: Optional[str]) -> str:
    output = f"{message}\n\n{text}" if message else text
    print(output, flush=True)
    return output


class Debug:
    """
    Prints tree dumps to stdout.

    Calling the instance is the shallow mode; deep renders the full
    host-level output.
    """

    def __call__(self, instance: Any, message: Optional[str] = None) -> str:
        return self.shallow(instance, message)

    def shallow(self, instance: Any, message: Optional[str] = None) -> str:
        """Print the immediate output of a node or element."""
        return _emit(format_tree(shallow(instance).output), message)

    def deep(self, instance: Any, message: Optional[str] = None) -> str:
        """
        Print the fully rendered tree.

        @param instance Element (rendered first), TreeNode, JSON snapshot or None
        @param message Optional annotation printed before the dump
        """
        if isinstance(instance, Element):
            instance = TestRenderer(instance).to_json()
        return _emit(format_tree(instance), message)


debug = Debug()
