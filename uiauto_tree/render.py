# uiauto_tree/render.py
"""
@file render.py
@brief Mounts an element and returns the query/update/debug bundle.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .debug import debug as _debug
from .element import Element
from .interfaces import IRenderHandle
from .queries import QueryAPI
from .renderer import NodeMockFactory, TestRenderer


@dataclass
class RenderOptions:
    """
    Options forwarded to the renderer.

    Attributes:
        create_node_mock: Called with each host element; the result becomes
            the node's instance and is handed to its ref
    """
    create_node_mock: Optional[NodeMockFactory] = None


RendererFactory = Callable[[Element, RenderOptions], IRenderHandle]


def default_renderer(element: Element, options: RenderOptions) -> IRenderHandle:
    return TestRenderer(element, create_node_mock=options.create_node_mock)


class _BoundDebug:
    """debug() for a render result: deep by default, with a shallow variant."""

    def __init__(self, handle: IRenderHandle):
        self._handle = handle

    def __call__(self, message: Optional[str] = None) -> str:
        return _debug.deep(self._handle.to_json(), message)

    def shallow(self, message: Optional[str] = None) -> str:
        return _debug.shallow(self._handle.root, message)


class RenderAPI(QueryAPI):
    """
    Result of render(): every query accessor plus update, unmount,
    to_json and debug for the mounted tree.
    """

    def __init__(self, handle: IRenderHandle):
        super().__init__(handle)
        self.handle = handle
        self.debug = _BoundDebug(handle)

    def update(self, element: Element) -> None:
        self.handle.update(element)

    def unmount(self) -> None:
        self.handle.unmount()

    def to_json(self) -> Any:
        return self.handle.to_json()


def render(
    element: Element,
    options: Optional[RenderOptions] = None,
    *,
    renderer: Optional[RendererFactory] = None,
) -> RenderAPI:
    """
    Mount an element.

    @param element Root element
    @param options Render options (create_node_mock)
    @param renderer Factory producing the render handle (reference renderer when None)
    @return RenderAPI bound to the live handle
    """
    options = options or RenderOptions()
    factory = renderer or default_renderer
    return RenderAPI(factory(element, options))
