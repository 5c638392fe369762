"""
Equation Discovery
==================
Black-box discovery of the operation signatures of a 3D math library.

Usage:
    from equationdiscovery import DiscoveryEngine

    database = DiscoveryEngine(max_arity=2).run()
    for signature in database.find_by_parameters(["Vector3"]):
        print(signature)
"""
from equationdiscovery.controller.engine import DiscoveryEngine
from equationdiscovery.model.database import EquationDatabase
from equationdiscovery.model.signatures import CandidateSignature, ValidatedSignature
from equationdiscovery.model.value_types import ValueTypeTag

__all__ = [
    "CandidateSignature",
    "DiscoveryEngine",
    "EquationDatabase",
    "ValidatedSignature",
    "ValueTypeTag",
]
