"""
The CONTROLLER layer runs signature discovery: it builds test values, calls
candidate operations and decides which calls are genuine signatures.

Note: This package should be pure Python/NumPy and should NOT write files;
persistence belongs to equationdiscovery.model.io.
"""
from equationdiscovery.controller.engine import DiscoveryEngine, DiscoveryReport
from equationdiscovery.controller.factory import InstanceFactory
from equationdiscovery.controller.validator import RejectionReason, SignatureValidator, ValidationOutcome

__all__ = [
    "DiscoveryEngine",
    "DiscoveryReport",
    "InstanceFactory",
    "RejectionReason",
    "SignatureValidator",
    "ValidationOutcome",
]
