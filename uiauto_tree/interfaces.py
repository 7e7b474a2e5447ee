"""
@file interfaces.py
@brief Abstract base classes for the collaborators of the query engine.

The engine never assumes a concrete renderer or clock: anything implementing
these interfaces can be substituted, including test doubles.
"""

from abc import ABC, abstractmethod
from typing import Any


class IRenderHandle(ABC):
    """
    Abstract render handle: the live binding to one mounted render.

    Created by a render call, mutated by update, invalidated by unmount.
    """

    @property
    @abstractmethod
    def root(self) -> Any:
        """
        Current root tree node.

        Raises:
            RendererError: If the handle has been unmounted
        """
        pass

    @abstractmethod
    def update(self, element: Any) -> None:
        """
        Replace the rendered element, triggering a new render pass.

        Args:
            element: The next element description
        """
        pass

    @abstractmethod
    def unmount(self) -> None:
        """Unmount the rendered tree."""
        pass

    @abstractmethod
    def to_json(self) -> Any:
        """
        Produce a serializable snapshot of the host-level output.

        Returns:
            A dict, a list of dicts/strings, a string, or None
        """
        pass


class IScheduler(ABC):
    """
    Abstract scheduler used by the async waiter.

    Provides a clock and a way to suspend until a later time.
    """

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds."""
        pass

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """
        Yield control to the event loop for the given number of seconds.

        Args:
            seconds: Delay in seconds (0 still yields)
        """
        pass
