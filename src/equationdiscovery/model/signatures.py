"""
Signature records produced by the discovery engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from equationdiscovery.model.value_types import ValueTypeTag


@dataclass(frozen=True)
class CandidateSignature:
    """A (owner, operation, parameter types, mode) combination waiting to be validated."""
    owner_type: ValueTypeTag
    operation_name: str
    parameter_types: Tuple[ValueTypeTag, ...] = ()
    is_static: bool = False

    @property
    def arity(self) -> int:
        return len(self.parameter_types)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameter_types)
        prefix = "static " if self.is_static else ""
        return f"{prefix}{self.owner_type}.{self.operation_name}({params})"


@dataclass(frozen=True)
class ValidatedSignature(CandidateSignature):
    """A candidate that passed every validation check, with its classified return type."""
    return_type: ValueTypeTag = ValueTypeTag.SCALAR

    @staticmethod
    def accept(candidate: CandidateSignature, return_type: ValueTypeTag) -> ValidatedSignature:
        return ValidatedSignature(
            owner_type=candidate.owner_type,
            operation_name=candidate.operation_name,
            parameter_types=candidate.parameter_types,
            is_static=candidate.is_static,
            return_type=return_type,
        )

    def __str__(self) -> str:
        return f"{super().__str__()}: {self.return_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the field names the documentation browser reads."""
        return {
            "className": self.owner_type.value,
            "methodName": self.operation_name,
            "parameters": [p.value for p in self.parameter_types],
            "returnType": self.return_type.value,
            "isStatic": self.is_static,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ValidatedSignature:
        return ValidatedSignature(
            owner_type=ValueTypeTag(data["className"]),
            operation_name=data["methodName"],
            parameter_types=tuple(ValueTypeTag(p) for p in data.get("parameters", [])),
            is_static=bool(data.get("isStatic", False)),
            return_type=ValueTypeTag(data["returnType"]),
        )
