"""
Generic Invoker
Resolves an operation by name and calls it, turning any exception raised by
the target into an explicit fault value the validator can inspect.
"""
from __future__ import annotations

from dataclasses import dataclass
import inspect
import logging
from typing import Any, Callable, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invocation:
    """Outcome of one call: either a value or the exception the call raised."""
    value: Any = None
    fault: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.fault is None


def resolve_operation(target: Any, name: str, is_static: bool) -> Optional[Callable[..., Any]]:
    """
    Find the callable for ``name`` in the requested calling mode.

    Instance mode accepts only ordinary methods bound to ``target``. Static mode
    looks on the class of ``target`` and accepts only static and class methods.

    Returns:
        The callable, or None if the operation does not exist in that mode.
    """
    owner_class = type(target)
    try:
        raw = inspect.getattr_static(owner_class, name)
    except AttributeError:
        return None

    is_class_level = isinstance(raw, (staticmethod, classmethod))
    if is_static != is_class_level:
        return None

    operation = getattr(owner_class if is_static else target, name, None)
    if not callable(operation):
        return None
    return operation


def invoke(operation: Callable[..., Any], arguments: Sequence[Any]) -> Invocation:
    try:
        return Invocation(value=operation(*arguments))
    except Exception as e:
        logger.debug(f"Invocation fault: {type(e).__name__}: {e}")
        return Invocation(fault=e)
