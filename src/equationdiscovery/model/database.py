"""
Equation Database
=================
The record produced by one discovery run, plus the lookups its readers use
(documentation browser, scenario parameter suggestions).

The database is regenerated on every run; there is no incremental update.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from equationdiscovery.model.signatures import ValidatedSignature
from equationdiscovery.model.value_types import ValueTypeTag


def utc_timestamp() -> str:
    """Current UTC time in ISO-8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def signature_string(signature: ValidatedSignature) -> str:
    """Human readable form, e.g. ``Vector3.dot(Vector3): number``."""
    return str(signature)


@dataclass
class EquationDatabase:
    version: str
    source: str
    generated_at: str = field(default_factory=utc_timestamp)
    methods: List[ValidatedSignature] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.methods)

    # --- lookups ---

    def find_by_parameters(self, parameter_types: Sequence[ValueTypeTag]) -> List[ValidatedSignature]:
        """Signatures whose ordered parameter list matches exactly."""
        wanted = tuple(ValueTypeTag(t) for t in parameter_types)
        return [m for m in self.methods if m.parameter_types == wanted]

    def find_by_return_type(self, return_type: ValueTypeTag) -> List[ValidatedSignature]:
        wanted = ValueTypeTag(return_type)
        return [m for m in self.methods if m.return_type == wanted]

    def find_by_owner(self, owner_type: ValueTypeTag) -> List[ValidatedSignature]:
        wanted = ValueTypeTag(owner_type)
        return [m for m in self.methods if m.owner_type == wanted]

    def find_by_method_name(self, method_name: str) -> List[ValidatedSignature]:
        return [m for m in self.methods if m.operation_name == method_name]

    def find(
        self,
        parameter_types: Sequence[ValueTypeTag],
        return_type: Optional[ValueTypeTag] = None
    ) -> List[ValidatedSignature]:
        """Signatures taking ``parameter_types``, optionally narrowed to one return type."""
        results = self.find_by_parameters(parameter_types)
        if return_type is not None:
            wanted = ValueTypeTag(return_type)
            results = [m for m in results if m.return_type == wanted]
        return results

    def method_names(self) -> List[str]:
        return sorted({m.operation_name for m in self.methods})

    # --- statistics ---

    def count_by_owner(self) -> Dict[str, int]:
        return dict(Counter(m.owner_type.value for m in self.methods))

    def count_by_method(self) -> Dict[str, int]:
        return dict(Counter(m.operation_name for m in self.methods))

    def stats(self) -> Dict[str, Any]:
        return {
            "total": len(self.methods),
            "byClass": self.count_by_owner(),
            "byMethod": self.count_by_method(),
            "version": self.version,
            "generatedAt": self.generated_at,
            "source": self.source,
        }

    # --- serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "generatedAt": self.generated_at,
            "source": self.source,
            "methods": [m.to_dict() for m in self.methods],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> EquationDatabase:
        return EquationDatabase(
            version=data["version"],
            source=data.get("source", ""),
            generated_at=data.get("generatedAt", ""),
            methods=[ValidatedSignature.from_dict(m) for m in data.get("methods", [])],
        )
