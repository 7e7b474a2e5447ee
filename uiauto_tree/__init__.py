"""
UIAuto Tree - query and interaction engine for rendered component trees.

This package provides:
- render: Mount an element and get query accessors bound to it
- Queries: get/get_all/query/query_all by name, type, text, props and test id
- fire_event: Invoke handler props to simulate user events
- wait_for_element: Async polling until an expectation stops failing
- debug / shallow: Human-readable tree dumps
- TreeConfig: Timeout and query conventions, loadable from YAML
"""

from uiauto_tree.config import QuerySettings, TimeoutSettings, TreeConfig
from uiauto_tree.debug import ShallowResult, debug, format_tree, shallow
from uiauto_tree.element import Element, create_element, h
from uiauto_tree.events import fire_event
from uiauto_tree.exceptions import (
    UIAutoTreeError,
    ConfigError,
    RendererError,
    NotFoundError,
    MultipleMatchesError,
    TimeoutError,
)
from uiauto_tree.interfaces import IRenderHandle, IScheduler
from uiauto_tree.queries import Criterion, CriterionKind, QueryAPI
from uiauto_tree.render import RenderAPI, RenderOptions, render
from uiauto_tree.renderer import TestRenderer, TreeNode
from uiauto_tree.waits import AsyncioScheduler, VirtualScheduler, flush_microtasks, wait_for_element

__all__ = [
    "render",
    "RenderAPI",
    "RenderOptions",
    "QueryAPI",
    "Criterion",
    "CriterionKind",
    "fire_event",
    "wait_for_element",
    "flush_microtasks",
    "AsyncioScheduler",
    "VirtualScheduler",
    "debug",
    "shallow",
    "ShallowResult",
    "format_tree",
    "Element",
    "create_element",
    "h",
    "TestRenderer",
    "TreeNode",
    "IRenderHandle",
    "IScheduler",
    "TreeConfig",
    "TimeoutSettings",
    "QuerySettings",
    "UIAutoTreeError",
    "ConfigError",
    "RendererError",
    "NotFoundError",
    "MultipleMatchesError",
    "TimeoutError",
]

__version__ = "1.0.0"
