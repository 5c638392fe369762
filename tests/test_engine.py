import pytest

from equationdiscovery.controller.engine import DEFAULT_OWNER_TYPES, DiscoveryEngine
from equationdiscovery.controller.validator import RejectionReason
from equationdiscovery.model.value_types import ValueTypeTag as T


@pytest.fixture(scope="module")
def full_database():
    engine = DiscoveryEngine(max_arity=1)
    return engine.run(), engine.report


def _find(database, owner, name, params=None, is_static=False):
    return [
        m for m in database.methods
        if m.owner_type == owner and m.operation_name == name and m.is_static == is_static
        and (params is None or m.parameter_types == tuple(params))
    ]


# ---------------------------------------------------------------
# Arity search
# ---------------------------------------------------------------

def test_zero_arity_stops_the_search():
    found = DiscoveryEngine(max_arity=2).discover_operation(T.VECTOR3, "length")
    assert len(found) == 1
    assert found[0].parameter_types == ()
    assert found[0].return_type == T.SCALAR


def test_dot_is_found_at_arity_one_only():
    found = DiscoveryEngine(max_arity=2).discover_operation(T.VECTOR3, "dot")
    assert found
    assert all(s.arity == 1 for s in found)
    assert (T.VECTOR3,) in [s.parameter_types for s in found]
    assert (T.QUATERNION,) not in [s.parameter_types for s in found]
    assert (T.VECTOR4,) not in [s.parameter_types for s in found]


def test_static_form_is_found():
    found = DiscoveryEngine(max_arity=2).discover_operation(T.QUATERNION, "from_euler")
    assert [(s.parameter_types, s.is_static, s.return_type) for s in found] == [
        ((T.EULER,), True, T.QUATERNION)
    ]


def test_static_scalar_constructor():
    found = DiscoveryEngine(max_arity=2).discover_operation(T.VECTOR2, "from_angle")
    assert all(s.is_static for s in found)
    assert (T.SCALAR,) in [s.parameter_types for s in found]


def test_static_search_needs_the_owner_slot():
    # from_angle takes one argument, which needs a pair (Vector2, number)
    assert DiscoveryEngine(max_arity=1).discover_operation(T.VECTOR2, "from_angle") == []


def test_fluent_operation_yields_nothing():
    assert DiscoveryEngine(max_arity=1).discover_operation(T.MATRIX4, "identity") == []


def test_unknown_operation_is_skipped_without_testing():
    engine = DiscoveryEngine(max_arity=2)
    assert engine.discover_operation(T.VECTOR3, "does_not_exist") == []
    assert engine.report.candidates_tested == 0


def test_max_arity_zero():
    engine = DiscoveryEngine(max_arity=0, owner_types=[T.VECTOR3])
    database = engine.run()
    assert all(m.arity == 0 for m in database.methods)
    assert _find(database, T.VECTOR3, "length")


# ---------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------

def test_negative_max_arity_raises():
    with pytest.raises(ValueError):
        DiscoveryEngine(max_arity=-1)


@pytest.mark.parametrize("owner", [T.SCALAR, T.BOOLEAN])
def test_builtin_owner_raises(owner):
    with pytest.raises(ValueError):
        DiscoveryEngine(owner_types=[owner])


def test_default_owners_are_the_structured_types():
    assert set(DEFAULT_OWNER_TYPES) == set(T) - {T.SCALAR, T.BOOLEAN}


# ---------------------------------------------------------------
# Full run
# ---------------------------------------------------------------

def test_full_run_expected_signatures(full_database):
    database, _ = full_database
    assert _find(database, T.VECTOR3, "length", [])
    assert _find(database, T.MATRIX4, "determinant", [])
    assert _find(database, T.QUATERNION, "conjugate", [])
    assert _find(database, T.QUATERNION, "multiply", [T.QUATERNION])
    assert _find(database, T.VECTOR3, "dot", [T.VECTOR3])


def test_full_run_excludes_fluent_mutators(full_database):
    database, _ = full_database
    names = {(m.owner_type, m.operation_name) for m in database.methods}
    for owner in DEFAULT_OWNER_TYPES:
        assert (owner, "identity") not in names
        assert (owner, "set_scalar") not in names


def test_full_run_has_no_skipped_names(full_database):
    database, _ = full_database
    assert not {"clone", "copy", "equals", "to_array", "set"} & set(database.method_names())


def test_full_run_metadata(full_database):
    database, _ = full_database
    assert database.version == "1.0.0"
    assert database.source == "Runtime AB testing"
    assert database.generated_at.endswith("Z")


def test_report_counters(full_database):
    database, report = full_database
    assert report.signatures_accepted == len(database)
    assert report.candidates_tested == report.signatures_accepted + sum(report.rejections.values())
    assert report.operations_enumerated > 0
    assert report.rejections[RejectionReason.FLUENT_SELF] > 0
    assert report.rejections[RejectionReason.PARAMETER_INSENSITIVE] > 0


def test_run_is_deterministic():
    first = DiscoveryEngine(max_arity=1, owner_types=[T.VECTOR3, T.QUATERNION]).run()
    second = DiscoveryEngine(max_arity=1, owner_types=[T.VECTOR3, T.QUATERNION]).run()
    assert [str(m) for m in first.methods] == [str(m) for m in second.methods]


def test_owner_order_is_preserved():
    database = DiscoveryEngine(max_arity=0, owner_types=[T.MATRIX3, T.VECTOR2]).run()
    owners = [m.owner_type for m in database.methods]
    assert owners == sorted(owners, key=[T.MATRIX3, T.VECTOR2].index)


def test_apply_quaternion_is_not_discovered(full_database):
    # baseline quaternions share the owner's x, y, z, which makes the
    # rotation degenerate for both variants
    database, _ = full_database
    assert _find(database, T.VECTOR3, "apply_quaternion") == []


def test_static_matrix_from_quaternion():
    found = DiscoveryEngine(max_arity=2).discover_operation(T.MATRIX4, "from_quaternion")
    assert ((T.QUATERNION,), True, T.MATRIX4) in [(s.parameter_types, s.is_static, s.return_type) for s in found]


def test_three_parameter_static_form_needs_arity_four():
    assert DiscoveryEngine(max_arity=3).discover_operation(T.VECTOR3, "from_spherical_coords") == []

    found = DiscoveryEngine(max_arity=4).discover_operation(T.VECTOR3, "from_spherical_coords")
    assert all(s.is_static and s.arity == 3 for s in found)
    assert (T.SCALAR, T.SCALAR, T.SCALAR) in [s.parameter_types for s in found]
