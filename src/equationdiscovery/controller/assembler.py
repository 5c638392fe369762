"""
Database Assembler
Collects accepted signatures in discovery order and builds the database.
"""
from __future__ import annotations

from collections import Counter
import logging
from typing import Dict, Iterable, List, Optional

from equationdiscovery.config import DATABASE_SOURCE, DATABASE_VERSION
from equationdiscovery.model.database import EquationDatabase, utc_timestamp
from equationdiscovery.model.signatures import ValidatedSignature

logger = logging.getLogger(__name__)


class DatabaseAssembler:

    def __init__(self) -> None:
        self._signatures: List[ValidatedSignature] = []

    def __len__(self) -> int:
        return len(self._signatures)

    @property
    def signatures(self) -> List[ValidatedSignature]:
        return list(self._signatures)

    def add(self, signature: ValidatedSignature) -> None:
        # No deduplication: arity pruning already bounds what gets here
        self._signatures.append(signature)

    def extend(self, signatures: Iterable[ValidatedSignature]) -> None:
        for signature in signatures:
            self.add(signature)

    def count_by_owner(self) -> Dict[str, int]:
        return dict(Counter(s.owner_type.value for s in self._signatures))

    def count_by_operation(self) -> Dict[str, int]:
        return dict(Counter(s.operation_name for s in self._signatures))

    def build(
        self,
        version: str = DATABASE_VERSION,
        source: str = DATABASE_SOURCE,
        generated_at: Optional[str] = None
    ) -> EquationDatabase:
        database = EquationDatabase(
            version=version,
            source=source,
            generated_at=generated_at or utc_timestamp(),
            methods=list(self._signatures),
        )
        logger.debug(f"Assembled database with {len(database)} signatures")
        return database
