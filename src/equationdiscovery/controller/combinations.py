"""
Parameter Combination Generator
Ordered tuples of catalog types, emitted arity by arity so the caller can stop
at the first arity that yields a valid signature.
"""
from __future__ import annotations

import itertools
from typing import Iterator, Sequence, Tuple

from equationdiscovery.model.value_types import ValueTypeTag

ParameterTuple = Tuple[ValueTypeTag, ...]

CATALOG_ORDER: Tuple[ValueTypeTag, ...] = tuple(ValueTypeTag)


def combinations_of_arity(
    arity: int,
    types: Sequence[ValueTypeTag] = CATALOG_ORDER
) -> Iterator[ParameterTuple]:
    """Every ordered tuple of ``arity`` types (repetition allowed)."""
    if arity < 0:
        raise ValueError(f"Arity must be >= 0, got {arity}")
    return itertools.product(types, repeat=arity)


def parameter_combinations(
    max_arity: int,
    types: Sequence[ValueTypeTag] = CATALOG_ORDER
) -> Iterator[ParameterTuple]:
    """
    All parameter tuples of length 0..max_arity, shortest first.

    Each call returns a new generator; nothing is shared between calls.
    """
    if max_arity < 0:
        raise ValueError(f"max_arity must be >= 0, got {max_arity}")
    for arity in range(max_arity + 1):
        yield from combinations_of_arity(arity, types)
