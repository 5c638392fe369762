"""
Instance Factory
================
Builds the deterministic test values fed to candidate operations.

Every catalog type has two baseline component vectors (variants A and B, see
``VALUE_TYPES``). A shared prefix of length k makes the first k components of
both variants identical, so a difference in output can only come from the
components at index k and beyond.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from equationdiscovery.model.value_types import (
    DEFAULT_CATALOG,
    TypeCatalog,
    Variant,
    VALUE_TYPES,
    ValueTypeTag,
)

Builder = Callable[[type, Sequence[Any]], Any]


def _build_components(cls: type, components: Sequence[Any]) -> Any:
    return cls(*components)


def _build_matrix(cls: type, components: Sequence[Any]) -> Any:
    return cls().set(*components)


# One builder per structured catalog type
_BUILDERS: Dict[ValueTypeTag, Builder] = {
    ValueTypeTag.VECTOR2: _build_components,
    ValueTypeTag.VECTOR3: _build_components,
    ValueTypeTag.VECTOR4: _build_components,
    ValueTypeTag.QUATERNION: _build_components,
    ValueTypeTag.EULER: _build_components,
    ValueTypeTag.MATRIX3: _build_matrix,
    ValueTypeTag.MATRIX4: _build_matrix,
}


def resolve_shared_prefix(value_type: ValueTypeTag, shared_prefix: Optional[int]) -> int:
    """
    Shared-prefix length actually used for ``value_type``.

    ``None`` means "not overridden": Quaternion and Vector4 then keep x, y, z
    identical, every other type varies all components.
    """
    if shared_prefix is None:
        return VALUE_TYPES[value_type].default_shared_prefix
    if shared_prefix < 0:
        raise ValueError(f"shared_prefix must be >= 0, got {shared_prefix}")
    return shared_prefix


def variant_components(
    value_type: ValueTypeTag,
    variant: Variant = Variant.A,
    shared_prefix: Optional[int] = None
) -> tuple:
    """Component values of one variant with the shared prefix applied."""
    info = VALUE_TYPES[value_type]
    prefix = resolve_shared_prefix(value_type, shared_prefix)
    own = info.baseline_a if Variant(variant) == Variant.A else info.baseline_b
    return tuple(
        info.baseline_a[i] if i < prefix else own[i]
        for i in range(info.component_count)
    )


class InstanceFactory:
    """Creates fresh test values for every catalog type."""

    def __init__(self, catalog: TypeCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog

    def create(
        self,
        value_type: ValueTypeTag,
        variant: Variant = Variant.A,
        shared_prefix: Optional[int] = None
    ) -> Any:
        """
        Create a test value.

        Args:
            value_type: Catalog type to build.
            variant: Which baseline to use for the components past the shared prefix.
            shared_prefix: Number of leading components taken from variant A
                regardless of ``variant``. ``None`` applies the type's default.

        Returns:
            A new object on every call; nothing is cached.
        """
        components = variant_components(value_type, variant, shared_prefix)

        if value_type == ValueTypeTag.SCALAR:
            return float(components[0])
        if value_type == ValueTypeTag.BOOLEAN:
            return bool(components[0])

        cls = self.catalog.class_for(value_type)
        return _BUILDERS[value_type](cls, components)

    def create_many(
        self,
        value_types: Sequence[ValueTypeTag],
        variant: Variant = Variant.A
    ) -> list:
        """Parameter tuple for one variant, each type with its default shared prefix."""
        return [self.create(t, variant) for t in value_types]
