# uiauto_tree/renderer.py
"""
@file renderer.py
@brief Tree nodes and the reference in-memory renderer.

The renderer expands composite components into host nodes on every mount or
update. It keeps no component state and does no reconciliation: each pass
builds a fresh tree.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Union

from .element import Element, display_name, is_component
from .exceptions import RendererError
from .interfaces import IRenderHandle

NodeMockFactory = Callable[[Element], Any]


class TreeNode:
    """
    One node of a rendered tree.

    Holds the element type and props that produced it, the rendered
    children (tree nodes or plain strings) and a link to its parent.
    """

    def __init__(
        self,
        type: Any,
        props: Dict[str, Any],
        parent: Optional[TreeNode] = None,
        instance: Any = None,
    ):
        """
        @param type Host element name or component callable
        @param props Props the element was rendered with
        @param parent Parent node (None for the root)
        @param instance Node mock for host nodes
        """
        self.type = type
        self.props = props
        self.parent = parent
        self.instance = instance
        self.children: List[Union[TreeNode, str]] = []

    @property
    def is_host(self) -> bool:
        return isinstance(self.type, str)

    @property
    def name(self) -> str:
        return display_name(self.type)

    def __repr__(self) -> str:
        return f"<TreeNode {self.name} props={sorted(k for k in self.props if k != 'children')}>"


Renderable = Any


class TestRenderer(IRenderHandle):
    """
    Reference render handle backed by an in-memory tree.

    Composite components are plain callables taking a props dict and
    returning a renderable (element, string, number, None, or a list).
    """

    __test__ = False

    def __init__(self, element: Element, create_node_mock: Optional[NodeMockFactory] = None):
        """
        @param element Root element to mount
        @param create_node_mock Optional factory for host node instances
        """
        self._create_node_mock = create_node_mock
        self._root: Optional[TreeNode] = None
        self._mounted = False
        self.update(element)

    @property
    def root(self) -> TreeNode:
        if not self._mounted or self._root is None:
            raise RendererError("Can't access root on an unmounted renderer")
        return self._root

    def update(self, element: Element) -> None:
        if not isinstance(element, Element):
            raise RendererError(f"Root must be an Element, got: {type(element).__name__}")
        self._root = self._build_element(element, parent=None)
        self._mounted = True

    def unmount(self) -> None:
        self._root = None
        self._mounted = False

    def to_json(self) -> Any:
        if not self._mounted or self._root is None:
            return None
        output = _node_json(self._root)
        if not output:
            return None
        if len(output) == 1:
            return output[0]
        return output

    # --- Tree construction ---

    def _build_element(self, element: Element, parent: Optional[TreeNode]) -> TreeNode:
        props = dict(element.props)
        node = TreeNode(element.type, props, parent=parent)

        if element.is_host:
            node.instance = self._mock_for(element)
            _attach_ref(props.get("ref"), node.instance)
            node.children = self._build_children(props.get("children"), node)
        elif is_component(element.type):
            output = element.type(props)
            node.children = self._build_children(output, node)
        else:
            raise RendererError(f"Invalid element type: {element.type!r}")

        return node

    def _build_children(self, renderable: Renderable, parent: TreeNode) -> List[Union[TreeNode, str]]:
        result: List[Union[TreeNode, str]] = []
        if renderable is None or isinstance(renderable, bool):
            return result
        if isinstance(renderable, (list, tuple)):
            for item in renderable:
                result.extend(self._build_children(item, parent))
            return result
        if isinstance(renderable, Element):
            result.append(self._build_element(renderable, parent))
            return result
        if isinstance(renderable, (str, int, float)):
            result.append(str(renderable))
            return result
        raise RendererError(f"Cannot render value of type {type(renderable).__name__}")

    def _mock_for(self, element: Element) -> Any:
        if self._create_node_mock is None:
            return None
        return self._create_node_mock(element)


def _attach_ref(ref: Any, instance: Any) -> None:
    if ref is None:
        return
    if callable(ref):
        ref(instance)
    elif hasattr(ref, "current"):
        ref.current = instance


def _node_json(node: TreeNode) -> List[Any]:
    """Host-level JSON for a node: composites are transparent."""
    if not node.is_host:
        items: List[Any] = []
        for child in node.children:
            if isinstance(child, TreeNode):
                items.extend(_node_json(child))
            else:
                items.append(child)
        return items

    children: List[Any] = []
    for child in node.children:
        if isinstance(child, TreeNode):
            children.extend(_node_json(child))
        else:
            children.append(child)

    props = {k: v for k, v in node.props.items() if k not in ("children", "ref")}
    return [{
        "type": node.type,
        "props": props,
        "children": children or None,
    }]
