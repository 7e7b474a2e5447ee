# uiauto_tree/queries.py
"""
@file queries.py
@brief Locates tree nodes by name, type, text, props or test id.

Every query kind is a tagged Criterion consumed by one traversal routine.
Results are always collected over the whole tree before the singular
variants decide, so ambiguity is never short-circuited.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import QuerySettings, TreeConfig
from .element import Element, display_name
from .exceptions import MultipleMatchesError, NotFoundError
from .renderer import TreeNode


class CriterionKind(str, Enum):
    NAME = "name"
    TYPE = "type"
    TEXT = "text"
    PROPS = "props"
    TEST_ID = "test_id"


@dataclass(frozen=True)
class Criterion:
    """A query kind plus the value to match against."""
    kind: CriterionKind
    value: Any

    def matches(self, node: Any, settings: QuerySettings) -> bool:
        return _MATCHERS[self.kind](node, self.value, settings)


def _resolve_root(target: Any) -> TreeNode:
    """Accept a tree node or anything exposing one as .root."""
    if isinstance(target, TreeNode):
        return target
    if isinstance(target, Element):
        raise TypeError("Cannot query an unrendered Element; render() it first")
    if hasattr(target, "root"):
        return target.root
    raise TypeError(f"Expected a tree node or an object exposing .root, got: {type(target).__name__}")


def _is_host(node: TreeNode) -> bool:
    return isinstance(node.type, str)


def _node_children(node: Any) -> List[Any]:
    return [c for c in node.children if not isinstance(c, str)]


def node_text(node: Any) -> str:
    """Concatenated text of a node's string children and their descendants."""
    parts: List[str] = []
    for child in node.children:
        if isinstance(child, str):
            parts.append(child)
        else:
            parts.append(node_text(child))
    return "".join(parts)


# --- Matchers ---

def _match_name(node: Any, value: Any, settings: QuerySettings) -> bool:
    if isinstance(value, str):
        return display_name(node.type) == value
    return node.type == value


def _match_type(node: Any, value: Any, settings: QuerySettings) -> bool:
    return node.type == value


def _match_text(node: Any, value: Any, settings: QuerySettings) -> bool:
    if node.type not in settings.text_types:
        return False
    text = node_text(node)
    if isinstance(value, str):
        return text == value
    return value.search(text) is not None


def _match_props(node: Any, value: Mapping[str, Any], settings: QuerySettings) -> bool:
    props = node.props
    for key, expected in value.items():
        if key not in props or props[key] != expected:
            return False
    return True


def _match_test_id(node: Any, value: Any, settings: QuerySettings) -> bool:
    prop = settings.test_id_prop
    return prop in node.props and node.props[prop] == value


_MATCHERS: Dict[CriterionKind, Callable[[Any, Any, QuerySettings], bool]] = {
    CriterionKind.NAME: _match_name,
    CriterionKind.TYPE: _match_type,
    CriterionKind.TEXT: _match_text,
    CriterionKind.PROPS: _match_props,
    CriterionKind.TEST_ID: _match_test_id,
}

# Kinds a composite can forward to the host node it renders. Such a host
# match repeats its composite's match and is not collected again.
_FORWARDED_KINDS = frozenset({CriterionKind.PROPS, CriterionKind.TEST_ID})


# --- Traversal ---

def find_all(target: Any, criterion: Criterion, settings: Optional[QuerySettings] = None) -> List[Any]:
    """
    Collect every node matching the criterion, in document order.

    Every node is visited. For props and test id, a match directly below a
    matching composite (no host node in between) is the forwarded copy of
    that match and is left out; any other nested match is kept.

    @param target Root tree node, or an object exposing .root
    @param criterion What to match
    @param settings Query conventions (current config when None)
    @return Matches, parents before children and siblings in order
    """
    settings = settings or TreeConfig.current().query
    root = _resolve_root(target)
    forwardable = criterion.kind in _FORWARDED_KINDS

    results: List[Any] = []
    # (node, True when a matching composite sits above with no host in between)
    stack = [(root, False)]
    while stack:
        node, forwarded = stack.pop()
        host = _is_host(node)
        if criterion.matches(node, settings):
            if not (forwardable and forwarded):
                results.append(node)
            below = forwardable and not host
        else:
            below = forwarded and not host
        stack.extend((child, below) for child in reversed(_node_children(node)))
    return results


def get_by(target: Any, criterion: Criterion, settings: Optional[QuerySettings] = None) -> Any:
    """Exactly one match, else NotFoundError or MultipleMatchesError."""
    results = find_all(target, criterion, settings)
    if not results:
        raise NotFoundError(criterion.kind.value, criterion.value)
    if len(results) > 1:
        raise MultipleMatchesError(criterion.kind.value, criterion.value, len(results))
    return results[0]


def get_all_by(target: Any, criterion: Criterion, settings: Optional[QuerySettings] = None) -> List[Any]:
    """All matches, raising NotFoundError when there are none."""
    results = find_all(target, criterion, settings)
    if not results:
        raise NotFoundError(criterion.kind.value, criterion.value)
    return results


def query_by(target: Any, criterion: Criterion, settings: Optional[QuerySettings] = None) -> Optional[Any]:
    """One match or None. Ambiguity still raises MultipleMatchesError."""
    results = find_all(target, criterion, settings)
    if len(results) > 1:
        raise MultipleMatchesError(criterion.kind.value, criterion.value, len(results))
    return results[0] if results else None


def query_all_by(target: Any, criterion: Criterion, settings: Optional[QuerySettings] = None) -> List[Any]:
    return find_all(target, criterion, settings)


class QueryAPI:
    """
    Named query accessors bound to a root.

    The root is resolved on every call, so an API bound to a render handle
    always sees the tree produced by the latest update.
    """

    def __init__(self, target: Any, settings: Optional[QuerySettings] = None):
        """
        @param target Root tree node, or an object exposing .root
        @param settings Query conventions (current config when None)
        """
        self._target = target
        self._settings = settings

    @property
    def root(self) -> Any:
        return _resolve_root(self._target)

    # --- get_by ---

    def get_by_name(self, name: Any) -> Any:
        return get_by(self._target, Criterion(CriterionKind.NAME, name), self._settings)

    def get_by_type(self, type: Any) -> Any:
        return get_by(self._target, Criterion(CriterionKind.TYPE, type), self._settings)

    def get_by_text(self, text: Any) -> Any:
        return get_by(self._target, Criterion(CriterionKind.TEXT, text), self._settings)

    def get_by_props(self, props: Mapping[str, Any]) -> Any:
        return get_by(self._target, Criterion(CriterionKind.PROPS, props), self._settings)

    def get_by_test_id(self, test_id: str) -> Any:
        return get_by(self._target, Criterion(CriterionKind.TEST_ID, test_id), self._settings)

    # --- get_all_by ---

    def get_all_by_name(self, name: Any) -> List[Any]:
        return get_all_by(self._target, Criterion(CriterionKind.NAME, name), self._settings)

    def get_all_by_type(self, type: Any) -> List[Any]:
        return get_all_by(self._target, Criterion(CriterionKind.TYPE, type), self._settings)

    def get_all_by_text(self, text: Any) -> List[Any]:
        return get_all_by(self._target, Criterion(CriterionKind.TEXT, text), self._settings)

    def get_all_by_props(self, props: Mapping[str, Any]) -> List[Any]:
        return get_all_by(self._target, Criterion(CriterionKind.PROPS, props), self._settings)

    def get_all_by_test_id(self, test_id: str) -> List[Any]:
        return get_all_by(self._target, Criterion(CriterionKind.TEST_ID, test_id), self._settings)

    # --- query_by ---

    def query_by_name(self, name: Any) -> Optional[Any]:
        return query_by(self._target, Criterion(CriterionKind.NAME, name), self._settings)

    def query_by_type(self, type: Any) -> Optional[Any]:
        return query_by(self._target, Criterion(CriterionKind.TYPE, type), self._settings)

    def query_by_text(self, text: Any) -> Optional[Any]:
        return query_by(self._target, Criterion(CriterionKind.TEXT, text), self._settings)

    def query_by_props(self, props: Mapping[str, Any]) -> Optional[Any]:
        return query_by(self._target, Criterion(CriterionKind.PROPS, props), self._settings)

    def query_by_test_id(self, test_id: str) -> Optional[Any]:
        return query_by(self._target, Criterion(CriterionKind.TEST_ID, test_id), self._settings)

    # --- query_all_by ---

    def query_all_by_name(self, name: Any) -> List[Any]:
        return query_all_by(self._target, Criterion(CriterionKind.NAME, name), self._settings)

    def query_all_by_type(self, type: Any) -> List[Any]:
        return query_all_by(self._target, Criterion(CriterionKind.TYPE, type), self._settings)

    def query_all_by_text(self, text: Any) -> List[Any]:
        return query_all_by(self._target, Criterion(CriterionKind.TEXT, text), self._settings)

    def query_all_by_props(self, props: Mapping[str, Any]) -> List[Any]:
        return query_all_by(self._target, Criterion(CriterionKind.PROPS, props), self._settings)

    def query_all_by_test_id(self, test_id: str) -> List[Any]:
        return query_all_by(self._target, Criterion(CriterionKind.TEST_ID, test_id), self._settings)
