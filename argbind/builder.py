# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds the `ArgumentSpecification` of a target type.

The build pass is a pure function of the type: no argv is consulted. Every
structural problem of the tag set is reported here, once, independent of how
many times binding is later attempted:

- a field tagged with more than one role
- positional indices that do not form `0..N-1` (gaps or duplicates)
- duplicate positional display names, option keys or long keys
- more than one variadic tail
- a frozen target type
- a switch option on a non-boolean field
- a positional or value option whose type is not in the primitive table and
  that declares no adapter
- a variadic tail that is not a container, whose container cannot be
  appended to, or that declares no adapter

Functions:
- build_specification: Build a fresh specification.
- get_specification: Cached `build_specification`, one per type.
"""
from __future__ import annotations

import typing
from dataclasses import fields, is_dataclass
from functools import lru_cache
from typing import Any

from argbind.classifier import describe
from argbind.descriptors import ArgumentSpecification, FieldDescriptor, Role
from argbind.exceptions import InvalidTargetTypeError, StructuralError
from argbind.logger import logger
from argbind.primitives import is_supported_scalar, unwrap_optional


def _resolve_type_hints(target_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(target_type)
    except (NameError, TypeError) as error:
        raise InvalidTargetTypeError(
            f"Could not resolve the field types of {target_type.__qualname__}: {error}"
        ) from error


def _check_positional(descriptor: FieldDescriptor) -> None:
    index = descriptor.index
    if not isinstance(index, int) or isinstance(index, bool) or index < 0:
        raise StructuralError(
            f"Positional field '{descriptor.name}' of {descriptor.owner_name} has "
            f"index {index!r}. Indices must be non-negative integers."
        )
    _check_convertible(descriptor)


def _check_option(descriptor: FieldDescriptor, seen_keys: dict[str, str]) -> None:
    key = descriptor.key
    if not isinstance(key, str) or len(key) != 1 or key == "-" or key.isspace():
        raise StructuralError(
            f"Option field '{descriptor.name}' of {descriptor.owner_name} has key "
            f"{key!r}. Keys must be a single character other than '-'."
        )
    names = [key]
    if descriptor.long_key:
        if any(char.isspace() or char == "=" for char in descriptor.long_key):
            raise StructuralError(
                f"Long key '{descriptor.long_key}' of option field '{descriptor.name}' "
                f"of {descriptor.owner_name} must not contain whitespace or '='."
            )
        names.append(descriptor.long_key)
    for name in names:
        if name in seen_keys:
            raise StructuralError(
                f"Option key '{name}' of field '{descriptor.name}' is already used by "
                f"field '{seen_keys[name]}' of {descriptor.owner_name}."
            )
        seen_keys[name] = descriptor.name

    if descriptor.expects_value:
        _check_convertible(descriptor)
    elif unwrap_optional(descriptor.declared_type) is not bool:
        raise StructuralError(
            f"Option field '{descriptor.name}' of {descriptor.owner_name} has to be of "
            f"type bool or must expect a value, not {descriptor.declared_type!r}."
        )


def _check_var_args(descriptor: FieldDescriptor) -> None:
    factory = descriptor.container_factory()
    try:
        container = factory()
    except Exception as error:
        raise StructuralError(
            f"Could not instantiate variadic tail container {factory!r} at field "
            f"'{descriptor.name}' of {descriptor.owner_name}: {error}"
        ) from error
    if not (hasattr(container, "append") or hasattr(container, "add")):
        raise StructuralError(
            f"Variadic tail container {type(container).__name__} of field "
            f"'{descriptor.name}' of {descriptor.owner_name} supports neither append "
            "nor add."
        )
    if not descriptor.has_adapter:
        raise StructuralError(
            f"Variadic tail field '{descriptor.name}' of {descriptor.owner_name} "
            "requires an adapter for its elements."
        )


def _check_convertible(descriptor: FieldDescriptor) -> None:
    if descriptor.has_adapter:
        if not callable(descriptor.adapter):
            raise StructuralError(
                f"Adapter {descriptor.adapter!r} of field '{descriptor.name}' of "
                f"{descriptor.owner_name} is not a factory."
            )
        return
    if not is_supported_scalar(descriptor.declared_type):
        raise StructuralError(
            f"Field '{descriptor.name}' of {descriptor.owner_name} is of type "
            f"{descriptor.declared_type!r}, which is neither a primitive type nor "
            "str, and no type adapter was provided."
        )


def _order_positional(
    pending: list[FieldDescriptor], target_type: type
) -> tuple[FieldDescriptor, ...]:
    ordered = sorted(pending, key=lambda descriptor: descriptor.index)
    names: dict[str, str] = {}
    for expected, descriptor in enumerate(ordered):
        if descriptor.index < expected:
            raise StructuralError(
                f"Duplicate positional index {descriptor.index} at field "
                f"'{descriptor.name}' of {target_type.__qualname__}: expected index "
                f"{expected}."
            )
        if descriptor.index > expected:
            raise StructuralError(
                f"Missing positional index {expected} in {target_type.__qualname__}. "
                f"Next index was {descriptor.index} at field '{descriptor.name}'."
            )
        if descriptor.display_name in names:
            raise StructuralError(
                f"Positional name '{descriptor.display_name}' of field "
                f"'{descriptor.name}' is already used by field "
                f"'{names[descriptor.display_name]}' of {target_type.__qualname__}."
            )
        names[descriptor.display_name] = descriptor.name
    return tuple(ordered)


def build_specification(target_type: type) -> ArgumentSpecification:
    """
    Build the argument specification of a dataclass type.

    Args:
        target_type (type): A dataclass whose fields carry argument tags.

    Returns:
        ArgumentSpecification: The frozen specification.

    Raises:
        InvalidTargetTypeError: If `target_type` is not a dataclass or its field
            types cannot be resolved.
        StructuralError: If the tags are misconfigured or the type is frozen.
    """
    if not isinstance(target_type, type) or not is_dataclass(target_type):
        raise InvalidTargetTypeError(
            f"Target type {target_type!r} must be a dataclass type."
        )
    if target_type.__dataclass_params__.frozen:
        raise StructuralError(
            f"Target type {target_type.__qualname__} is a frozen dataclass. Its fields "
            "cannot be assigned after construction."
        )
    hints = _resolve_type_hints(target_type)

    pending_positional: list[FieldDescriptor] = []
    options: list[FieldDescriptor] = []
    unannotated: list[FieldDescriptor] = []
    seen_keys: dict[str, str] = {}
    var_args: FieldDescriptor | None = None

    for field in fields(target_type):
        descriptor = describe(field, hints.get(field.name, field.type), target_type)
        if descriptor.role is Role.POSITIONAL:
            _check_positional(descriptor)
            pending_positional.append(descriptor)
        elif descriptor.role is Role.OPTION:
            _check_option(descriptor, seen_keys)
            options.append(descriptor)
        elif descriptor.role is Role.VARIADIC_TAIL:
            if var_args is not None:
                raise StructuralError(
                    f"{target_type.__qualname__} declares more than one variadic tail: "
                    f"'{var_args.name}' and '{descriptor.name}'."
                )
            _check_var_args(descriptor)
            var_args = descriptor
        else:
            unannotated.append(descriptor)

    specification = ArgumentSpecification(
        target_type=target_type,
        positional=_order_positional(pending_positional, target_type),
        options=tuple(options),
        var_args=var_args,
        unannotated=tuple(unannotated),
    )
    logger.debug("Built %s", specification)
    return specification


@lru_cache(maxsize=None)
def get_specification(target_type: type) -> ArgumentSpecification:
    """Return the cached specification of `target_type`, building it on first use."""
    return build_specification(target_type)
