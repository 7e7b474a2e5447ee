# uiauto_tree/element.py
"""
@file element.py
@brief Element descriptions consumed by renderers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

# Host element names understood by the reference renderer.
VIEW = "View"
TEXT = "Text"
TEXT_INPUT = "TextInput"
SCROLL_VIEW = "ScrollView"
IMAGE = "Image"

Component = Callable[[Dict[str, Any]], Any]
ElementType = Union[str, Component]


@dataclass
class Element:
    """
    Description of one element: a host name or a component, plus its props.

    Children live under props["children"]: a single child is stored as-is,
    several children as a tuple.
    """
    type: ElementType
    props: Dict[str, Any] = field(default_factory=dict)
    key: Optional[str] = None

    @property
    def is_host(self) -> bool:
        return isinstance(self.type, str)

    @property
    def children(self) -> Any:
        return self.props.get("children")


def create_element(type: ElementType, props: Optional[Dict[str, Any]] = None, *children: Any) -> Element:
    """
    Build an element.

    @param type Host element name or component callable
    @param props Element props (copied)
    @param children Child renderables, appended under props["children"]
    @return Element
    """
    merged = dict(props or {})
    key = merged.pop("key", None)
    if len(children) == 1:
        merged["children"] = children[0]
    elif children:
        merged["children"] = tuple(children)
    return Element(type=type, props=merged, key=key)


h = create_element


def display_name(type: Any) -> str:
    """Name used for matching and printing: host name, display_name, then __name__."""
    if isinstance(type, str):
        return type
    name = getattr(type, "display_name", None) or getattr(type, "__name__", None)
    if name:
        return str(name)
    return "Unknown"


def is_component(type: Any) -> bool:
    return callable(type) and not isinstance(type, str)
