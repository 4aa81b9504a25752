"""A context manager that runs a cleanup action when its block ends."""

from __future__ import annotations

from types import TracebackType
from typing import Any, Callable, Optional, Type

__all__ = ["ScopeGuard"]


class ScopeGuard:
    """Run ``action(*args, **kwargs)`` when the ``with`` block exits, unless dismissed.

    The action runs whether the block ends normally or by an exception, and
    the exception is not suppressed.
    """

    __slots__ = ("_action", "_args", "_kwargs", "_active")

    def __init__(self, action: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        if not callable(action):
            raise TypeError("action must be callable")
        self._action = action
        self._args = args
        self._kwargs = kwargs
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the action will still run on exit."""
        return self._active

    def dismiss(self) -> None:
        """Cancel the action."""
        self._active = False

    def __enter__(self) -> "ScopeGuard":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if self._active:
            self._active = False
            self._action(*self._args, **self._kwargs)
        return False