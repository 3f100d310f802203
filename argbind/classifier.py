# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies dataclass fields into command line roles.

A field may carry at most one of the positional, option and variadic tail
tags. Carrying more than one is a `StructuralError` naming both roles, the
field and the owning type. A field carrying none is `Role.UNANNOTATED` and is
ignored by the binder.
"""
from dataclasses import Field
from typing import Any

from argbind.descriptors import FieldDescriptor, Role
from argbind.exceptions import StructuralError
from argbind.tags import OPTION_KEY, POSITIONAL_KEY, VARIADIC_TAIL_KEY

_ROLE_KEYS: tuple[tuple[Role, str], ...] = (
    (Role.POSITIONAL, POSITIONAL_KEY),
    (Role.OPTION, OPTION_KEY),
    (Role.VARIADIC_TAIL, VARIADIC_TAIL_KEY),
)


def read_tags(field: Field) -> dict[Role, Any]:
    """Return the tags present on `field`, keyed by role."""
    return {
        role: field.metadata[key]
        for role, key in _ROLE_KEYS
        if field.metadata.get(key) is not None
    }


def classify(field: Field, owner: type | None = None) -> Role:
    """
    Return the single role of `field`.

    Raises:
        StructuralError: If the field carries more than one role tag.
    """
    found = read_tags(field)
    if len(found) > 1:
        first, second = list(found)[:2]
        owner_name = getattr(owner, "__qualname__", "<unknown>")
        raise StructuralError(
            f"A field can only be one of a positional argument, an option or a "
            f"variadic tail. The field '{field.name}' of {owner_name} was "
            f"tagged as both {first} and {second}."
        )
    if not found:
        return Role.UNANNOTATED
    return next(iter(found))


def describe(field: Field, declared_type: Any, owner: type | None = None) -> FieldDescriptor:
    """Classify `field` and wrap it in a `FieldDescriptor`."""
    role = classify(field, owner)
    tag = read_tags(field).get(role)
    return FieldDescriptor(
        name=field.name,
        declared_type=declared_type,
        role=role,
        tag=tag,
        owner=owner,
    )
