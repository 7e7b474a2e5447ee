# uiauto_tree/exceptions.py
"""
@file exceptions.py
@brief Custom exception classes for the tree query engine.
"""

from __future__ import annotations
from typing import Any, Optional


class UIAutoTreeError(Exception):
    """Base exception for the package."""
    pass


class ConfigError(UIAutoTreeError):
    """Raised when YAML configuration is invalid."""
    pass


class RendererError(UIAutoTreeError):
    """Raised when a render handle is used in an invalid state."""
    pass


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return repr(value)
    pattern = getattr(value, "pattern", None)
    if isinstance(pattern, str):
        return f"/{pattern}/"
    name = getattr(value, "display_name", None) or getattr(value, "__name__", None)
    if name:
        return str(name)
    return repr(value)


class NotFoundError(UIAutoTreeError):
    """
    Raised when a get query finds no node for its criterion.

    Attributes:
        kind: Criterion kind ("name", "type", "text", "props", "test_id")
        value: The criterion value that was searched for
    """

    def __init__(self, kind: str, value: Any):
        self.kind = kind
        self.value = value
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return f"no nodes found with {self.kind}={_format_value(self.value)}"


class MultipleMatchesError(UIAutoTreeError):
    """
    Raised when a singular query matches more than one node.

    Ambiguity is never resolved by picking a match.
    """

    def __init__(self, kind: str, value: Any, count: int):
        self.kind = kind
        self.value = value
        self.count = count
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return (
            f"expected 1 node with {self.kind}={_format_value(self.value)} "
            f"but found {self.count}"
        )


class TimeoutError(UIAutoTreeError):
    """
    Raised when wait_for_element runs out of time.

    This exception preserves the last failure raised by the expectation,
    making debugging significantly easier.

    Attributes:
        original_exception: The last exception that was raised before timeout
        description: Human-readable description of what was being waited for
        timeout: The timeout value in seconds
        attempt_count: Number of attempts made
        elapsed_time: Actual elapsed time in seconds
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.original_exception: Optional[BaseException] = None
        self.description: Optional[str] = None
        self.timeout: Optional[float] = None
        self.attempt_count: Optional[int] = None
        self.elapsed_time: Optional[float] = None

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.original_exception is not None:
            details.append(f"Original exception: {type(self.original_exception).__name__}")
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg

    def get_root_cause(self) -> Optional[BaseException]:
        """
        Get the root cause exception by traversing the chain.

        @return The deepest original_exception in the chain, or None
        """
        current = self.original_exception
        while current is not None:
            if getattr(current, "original_exception", None) is not None:
                current = current.original_exception
            else:
                return current
        return None

    def get_traceback_str(self) -> str:
        """
        Get a formatted traceback string from the original exception.

        @return Formatted traceback string or empty string if no original exception
        """
        if self.original_exception is None:
            return ""

        import traceback
        return "".join(traceback.format_exception(
            type(self.original_exception),
            self.original_exception,
            self.original_exception.__traceback__
        ))
