import pytest

from equationdiscovery.controller.factory import InstanceFactory
from equationdiscovery.controller.validator import SignatureValidator
from equationdiscovery.mathlib import Vector3
from equationdiscovery.model.value_types import DEFAULT_CATALOG, ValueTypeTag


class SuspectVector3(Vector3):
    """Vector3 with operations that imitate the classic false positives."""

    def constant(self, *args):
        # ignores every argument
        return 42.0

    def scale_in_place(self, *args):
        self.x *= 2.0
        return self

    def planar_dot(self, other):
        # declared for vectors but only reads x and y
        return self.x * other.x + self.y * other.y

    def xyz_sum(self, value):
        # a Vector3 operation that would happily take a Quaternion
        return value.x + value.y + value.z

    def x_plus_w(self, value):
        # needs the fourth component, so a Vector3 argument faults
        return value.x + value.w

    def nothing(self):
        return None


@pytest.fixture
def factory():
    return InstanceFactory()


@pytest.fixture
def validator():
    return SignatureValidator()


@pytest.fixture
def suspect_catalog():
    return DEFAULT_CATALOG.with_class(ValueTypeTag.VECTOR3, SuspectVector3)


@pytest.fixture
def suspect_validator(suspect_catalog):
    return SignatureValidator(catalog=suspect_catalog)
