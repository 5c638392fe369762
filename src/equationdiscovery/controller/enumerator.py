"""
Operation Enumerator
Lists the candidate operation names exposed by a target object.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, FrozenSet, List

logger = logging.getLogger(__name__)

# Structural and lifecycle helpers: construction, equality, serialization,
# copying and array import/export are not algebraic operations.
SKIPPED_OPERATIONS: FrozenSet[str] = frozenset({
    "equals",
    "clone",
    "copy",
    "to_array",
    "from_array",
    "to_dict",
    "from_dict",
    "to_json",
    "to_string",
    "get",
    "set",
    "for_each",
    "map",
    "reduce",
    "filter",
    "iterator",
})

PRIVATE_PREFIX = "_"


def should_skip(name: str) -> bool:
    return name in SKIPPED_OPERATIONS or name.startswith(PRIVATE_PREFIX)


def _is_operation(attribute: Any) -> bool:
    if isinstance(attribute, (staticmethod, classmethod)):
        return True
    return inspect.isfunction(attribute)


def enumerate_operations(instance: Any) -> List[str]:
    """
    Names of the operations ``instance`` exposes, own and inherited.

    Walks the class hierarchy (``object`` excluded) and keeps plain functions,
    static methods and class methods. Properties and data attributes are not
    operations.

    Returns:
        Each qualifying name once, sorted for reproducible runs.
    """
    names = set()
    for klass in type(instance).__mro__:
        if klass is object:
            continue
        for name, attribute in vars(klass).items():
            if should_skip(name):
                continue
            if _is_operation(attribute):
                names.add(name)

    logger.debug(f"{type(instance).__name__}: {len(names)} candidate operations")
    return sorted(names)
