"""
Discovery Engine
================
Drives a full discovery run: enumerate the operations of every owner type,
search parameter tuples arity by arity, validate each candidate and assemble
the accepted signatures into an EquationDatabase.

Arity search policy
-------------------
Arities are tried in increasing order. Once a calling mode (instance or
static) accepts a signature at arity k, that mode is not tried at k+1 or
above for the same operation: a longer signature accepted after a shorter one
is assumed to be an accidental superset.

Static forms are only tried for tuples whose first type is the owner type.
The leading type is stripped and the class-level operation is called with the
remaining parameters.

Note: This module is single-threaded and deterministic. Repeated runs against
an unchanged library produce the same signatures.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Sequence

from equationdiscovery.config import DATABASE_SOURCE, DATABASE_VERSION, DEFAULT_MAX_ARITY, EQUALITY_TOLERANCE
from equationdiscovery.controller.assembler import DatabaseAssembler
from equationdiscovery.controller.combinations import combinations_of_arity
from equationdiscovery.controller.enumerator import enumerate_operations
from equationdiscovery.controller.invoker import resolve_operation
from equationdiscovery.controller.validator import SignatureValidator
from equationdiscovery.model.database import EquationDatabase
from equationdiscovery.model.signatures import ValidatedSignature
from equationdiscovery.model.value_types import DEFAULT_CATALOG, TypeCatalog, ValueTypeTag

logger = logging.getLogger(__name__)

DEFAULT_OWNER_TYPES: tuple = (
    ValueTypeTag.VECTOR2,
    ValueTypeTag.VECTOR3,
    ValueTypeTag.VECTOR4,
    ValueTypeTag.QUATERNION,
    ValueTypeTag.EULER,
    ValueTypeTag.MATRIX3,
    ValueTypeTag.MATRIX4,
)


@dataclass
class DiscoveryReport:
    """Running counters of one discovery run."""
    operations_enumerated: int = 0
    candidates_tested: int = 0
    signatures_accepted: int = 0
    rejections: Counter = field(default_factory=Counter)

    def rejections_by_reason(self) -> Dict[str, int]:
        return {str(reason): count for reason, count in self.rejections.items()}


class DiscoveryEngine:

    def __init__(
        self,
        catalog: TypeCatalog = DEFAULT_CATALOG,
        max_arity: int = DEFAULT_MAX_ARITY,
        owner_types: Sequence[ValueTypeTag] = DEFAULT_OWNER_TYPES,
        tolerance: float = EQUALITY_TOLERANCE
    ) -> None:
        if max_arity < 0:
            raise ValueError(f"max_arity must be >= 0, got {max_arity}")
        structured = set(catalog.classes)
        for owner in owner_types:
            if ValueTypeTag(owner) not in structured:
                raise ValueError(f"'{owner}' cannot own operations; expected one of {sorted(structured)}")

        self.catalog = catalog
        self.max_arity = max_arity
        self.owner_types = tuple(ValueTypeTag(t) for t in owner_types)
        self.validator = SignatureValidator(catalog, tolerance)
        self.report = DiscoveryReport()

    def _test(
        self,
        owner_type: ValueTypeTag,
        operation_name: str,
        parameter_types: Sequence[ValueTypeTag],
        is_static: bool
    ) -> Optional[ValidatedSignature]:
        outcome = self.validator.evaluate(owner_type, operation_name, parameter_types, is_static)
        self.report.candidates_tested += 1
        if outcome.accepted:
            self.report.signatures_accepted += 1
        else:
            self.report.rejections[outcome.rejection] += 1
        return outcome.signature

    def discover_operation(self, owner_type: ValueTypeTag, operation_name: str) -> List[ValidatedSignature]:
        """All accepted signatures of one operation, in discovery order."""
        owner_type = ValueTypeTag(owner_type)
        owner = self.validator.factory.create(owner_type)

        # A mode the operation does not exist in is done before it starts
        instance_done = resolve_operation(owner, operation_name, is_static=False) is None
        static_done = resolve_operation(owner, operation_name, is_static=True) is None

        found: List[ValidatedSignature] = []
        for arity in range(self.max_arity + 1):
            if instance_done and static_done:
                break

            instance_hit = False
            static_hit = False
            for parameter_types in combinations_of_arity(arity):
                if not instance_done:
                    signature = self._test(owner_type, operation_name, parameter_types, False)
                    if signature:
                        found.append(signature)
                        instance_hit = True

                if not static_done and arity > 0 and parameter_types[0] == owner_type:
                    signature = self._test(owner_type, operation_name, parameter_types[1:], True)
                    if signature:
                        found.append(signature)
                        static_hit = True

            instance_done = instance_done or instance_hit
            static_done = static_done or static_hit

        return found

    def discover_owner(self, owner_type: ValueTypeTag) -> List[ValidatedSignature]:
        owner_type = ValueTypeTag(owner_type)
        logger.info(f"Analyzing {owner_type}...")
        instance = self.validator.factory.create(owner_type)
        operations = enumerate_operations(instance)
        self.report.operations_enumerated += len(operations)
        logger.info(f"Found {len(operations)} operations to test on {owner_type}")

        found: List[ValidatedSignature] = []
        for operation_name in operations:
            signatures = self.discover_operation(owner_type, operation_name)
            if signatures:
                logger.info(f"  {operation_name}: {len(signatures)} valid signatures")
            found.extend(signatures)
        return found

    def run(
        self,
        version: str = DATABASE_VERSION,
        source: str = DATABASE_SOURCE
    ) -> EquationDatabase:
        """Discover every owner type and assemble the database."""
        logger.info(f"Starting equation discovery (max arity {self.max_arity}, "
                    f"{len(self.owner_types)} owner types)")
        self.report = DiscoveryReport()
        assembler = DatabaseAssembler()

        for owner_type in self.owner_types:
            assembler.extend(self.discover_owner(owner_type))

        database = assembler.build(version=version, source=source)

        logger.info(f"Discovery finished: {len(database)} signatures from "
                    f"{self.report.candidates_tested} candidates")
        for owner, count in assembler.count_by_owner().items():
            logger.info(f"  {owner}: {count} equations")
        for reason, count in self.report.rejections_by_reason().items():
            logger.debug(f"  rejected ({reason}): {count}")

        return database
