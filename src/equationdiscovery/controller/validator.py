"""
Signature Validator
===================
Decides whether calling an operation with a given tuple of parameter types is a
genuine signature of that operation.

Why is this file needed?
------------------------
An operation that runs without raising is not yet proof of a signature. Duck
typed arguments let many calls "succeed" for the wrong reason:

1. Fluent mutators return the object they were called on. They produce no
   value, so they are not equations.
2. Operations that ignore some or all of their arguments run with anything.
   Calling again with different arguments and getting the same result exposes
   them.
3. Operations that read only part of a structured argument (x and y of a
   Vector3) also accept the larger type. Substituting the smaller type and
   still seeing the output change exposes them.

Checks run in order and the first failure rejects the candidate. Every call
uses freshly built instances, so no state leaks from one call to the next.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Optional, Sequence

from equationdiscovery.config import EQUALITY_TOLERANCE
from equationdiscovery.controller.comparison import results_equal
from equationdiscovery.controller.factory import InstanceFactory
from equationdiscovery.controller.invoker import Invocation, invoke, resolve_operation
from equationdiscovery.model.signatures import CandidateSignature, ValidatedSignature
from equationdiscovery.model.value_types import (
    DEFAULT_CATALOG,
    TypeCatalog,
    Variant,
    ValueTypeTag,
    smaller_type,
)

logger = logging.getLogger(__name__)


class RejectionReason(StrEnum):
    NOT_INVOCABLE = "not invocable"
    INVOCATION_FAULT = "invocation fault"
    UNCLASSIFIABLE_RETURN = "unclassifiable return value"
    FLUENT_SELF = "returns its own instance"
    PARAMETER_INSENSITIVE = "parameters have no observable effect"
    UNDER_SPECIFIED = "accepts a smaller parameter type"


@dataclass(frozen=True)
class ValidationOutcome:
    candidate: CandidateSignature
    signature: Optional[ValidatedSignature] = None
    rejection: Optional[RejectionReason] = None
    detail: str = ""

    @property
    def accepted(self) -> bool:
        return self.signature is not None


class SignatureValidator:
    """Runs the validation checks against one candidate at a time."""

    def __init__(
        self,
        catalog: TypeCatalog = DEFAULT_CATALOG,
        tolerance: float = EQUALITY_TOLERANCE
    ) -> None:
        self.catalog = catalog
        self.factory = InstanceFactory(catalog)
        self.tolerance = tolerance

    def validate(
        self,
        owner_type: ValueTypeTag,
        operation_name: str,
        parameter_types: Sequence[ValueTypeTag],
        is_static: bool = False
    ) -> Optional[ValidatedSignature]:
        """The validated signature, or None if the candidate is rejected."""
        return self.evaluate(owner_type, operation_name, parameter_types, is_static).signature

    def evaluate(
        self,
        owner_type: ValueTypeTag,
        operation_name: str,
        parameter_types: Sequence[ValueTypeTag],
        is_static: bool = False
    ) -> ValidationOutcome:
        """
        Validate a candidate and report which check rejected it, if any.

        Args:
            owner_type: Catalog type that owns the operation.
            operation_name: Name of the operation to call.
            parameter_types: Declared parameter types, in order.
            is_static: Call the class-level operation instead of the instance one.

        Returns:
            A ValidationOutcome carrying either the signature or the rejection reason.
        """
        candidate = CandidateSignature(
            owner_type=ValueTypeTag(owner_type),
            operation_name=operation_name,
            parameter_types=tuple(ValueTypeTag(t) for t in parameter_types),
            is_static=is_static,
        )

        # 1. Invocability
        owner = self.factory.create(candidate.owner_type)
        operation = resolve_operation(owner, operation_name, is_static)
        if operation is None:
            return self._reject(candidate, RejectionReason.NOT_INVOCABLE)

        # 2. Initial call with variant A parameters
        first = invoke(operation, self.factory.create_many(candidate.parameter_types, Variant.A))
        if not first.ok:
            return self._reject(candidate, RejectionReason.INVOCATION_FAULT, repr(first.fault))

        # 3. Return type
        return_type = self.catalog.classify(first.value)
        if return_type is None:
            return self._reject(
                candidate, RejectionReason.UNCLASSIFIABLE_RETURN, type(first.value).__name__
            )

        # 4. Fluent mutator returning its own instance
        if first.value is owner:
            return self._reject(candidate, RejectionReason.FLUENT_SELF)

        # 5. Differential: variant B parameters must change the result
        if candidate.arity > 0:
            second = self._call(candidate, candidate.parameter_types, Variant.B)
            if not second.ok:
                return self._reject(candidate, RejectionReason.INVOCATION_FAULT, repr(second.fault))
            if self._equal(first.value, second.value):
                return self._reject(candidate, RejectionReason.PARAMETER_INSENSITIVE)

        # 6. Under-specification: a smaller type in any position must not
        #    produce variant-dependent output
        for position, declared in enumerate(candidate.parameter_types):
            smaller = smaller_type(declared)
            if smaller is None:
                continue

            substituted = list(candidate.parameter_types)
            substituted[position] = smaller
            result_a = self._call(candidate, substituted, Variant.A)
            result_b = self._call(candidate, substituted, Variant.B)

            if not (result_a.ok and result_b.ok):
                # The smaller type was refused
                continue
            if not self._equal(result_a.value, result_b.value):
                return self._reject(
                    candidate,
                    RejectionReason.UNDER_SPECIFIED,
                    f"position {position}: {declared} -> {smaller}"
                )

        # 7. Accept
        signature = ValidatedSignature.accept(candidate, return_type)
        logger.debug(f"Accepted {signature}")
        return ValidationOutcome(candidate=candidate, signature=signature)

    def _call(
        self,
        candidate: CandidateSignature,
        parameter_types: Sequence[ValueTypeTag],
        variant: Variant
    ) -> Invocation:
        """Call the candidate's operation on a fresh variant A owner."""
        owner = self.factory.create(candidate.owner_type)
        operation = resolve_operation(owner, candidate.operation_name, candidate.is_static)
        if operation is None:
            return Invocation(fault=AttributeError(candidate.operation_name))
        return invoke(operation, self.factory.create_many(parameter_types, variant))

    def _equal(self, a, b) -> bool:
        return results_equal(a, b, catalog=self.catalog, tolerance=self.tolerance)

    @staticmethod
    def _reject(
        candidate: CandidateSignature,
        reason: RejectionReason,
        detail: str = ""
    ) -> ValidationOutcome:
        logger.debug(f"Rejected {candidate}: {reason}{f' ({detail})' if detail else ''}")
        return ValidationOutcome(candidate=candidate, rejection=reason, detail=detail)
