# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Binds a parsed model onto a fresh instance of the target type.

The binder walks the descriptors of an `ArgumentSpecification` and, for each
one, converts the matching token(s) of the parsed model and stores the result
on the target instance:

- Positional: looked up by display name. Absent tokens leave the default.
- Switch option: the presence flag is stored. The field must be a bool.
- Value option: converted when present, otherwise the default is left.
- Variadic tail: a fresh container receives every leftover token, converted
  by the field's adapter.

Conversion uses the field's adapter when one is declared, else the primitive
table. Conversion or storage failures raise `ValueAssignmentError`.

Functions:
- create_target: Construct a fresh instance of the target type.
- bind: Populate an instance from a parsed model.
- convert_token: Convert one token for one descriptor.
"""
from __future__ import annotations

from dataclasses import MISSING, FrozenInstanceError, fields
from typing import Any, get_origin

from argbind.adapters import TypeAdapter
from argbind.descriptors import ArgumentSpecification, FieldDescriptor, Role
from argbind.exceptions import (
    InvalidTargetTypeError,
    StructuralError,
    ValueAssignmentError,
)
from argbind.logger import logger
from argbind.parser.argument_model import ParsedModel
from argbind.primitives import (
    is_supported_scalar,
    scalar_kind_of,
    unwrap_optional,
    zero_value,
)


def _initial_value(descriptor: FieldDescriptor | None) -> Any:
    if descriptor is None:
        return None
    if descriptor.role is Role.VARIADIC_TAIL:
        return descriptor.container_factory()()
    if is_supported_scalar(descriptor.declared_type):
        return zero_value(descriptor.declared_type)
    return None


def create_target(specification: ArgumentSpecification) -> Any:
    """
    Construct a fresh instance of the specification's target type.

    Init fields without a default receive the zero value of their primitive
    kind, an empty container for the variadic tail, or None.

    Raises:
        InvalidTargetTypeError: If the target type cannot be instantiated.
    """
    target_type = specification.target_type
    by_name = {
        descriptor.name: descriptor
        for descriptor in specification.descriptors + specification.unannotated
    }
    kwargs = {
        field.name: _initial_value(by_name.get(field.name))
        for field in fields(target_type)
        if field.init
        and field.default is MISSING
        and field.default_factory is MISSING
    }
    try:
        return target_type(**kwargs)
    except Exception as error:
        raise InvalidTargetTypeError(
            f"Could not instantiate target object of type {target_type.__qualname__}: "
            f"{error}"
        ) from error


def _new_adapter(descriptor: FieldDescriptor) -> TypeAdapter:
    factory = descriptor.adapter
    try:
        adapter = factory()
    except Exception as error:
        raise InvalidTargetTypeError(
            f"Could not instantiate type adapter {factory!r} for field "
            f"'{descriptor.name}' of {descriptor.owner_name}: {error}"
        ) from error
    if not callable(getattr(adapter, "parse", None)):
        raise StructuralError(
            f"Adapter factory {factory!r} of field '{descriptor.name}' of "
            f"{descriptor.owner_name} did not produce a TypeAdapter."
        )
    return adapter


def _parse_with(
    adapter: TypeAdapter, descriptor: FieldDescriptor, token: str
) -> Any:
    try:
        return adapter.parse(token)
    except StructuralError:
        raise
    except Exception as error:
        raise ValueAssignmentError(
            f"Could not convert value '{token}' for field '{descriptor.name}' of "
            f"{descriptor.owner_name}: {error}",
            field_name=descriptor.name,
            token=token,
            target_type=descriptor.declared_type,
        ) from error


def convert_token(descriptor: FieldDescriptor, token: str) -> Any:
    """
    Convert one token for `descriptor`.

    Uses the declared adapter when there is one, otherwise the primitive table.

    Raises:
        StructuralError: If the type has no implicit conversion and no adapter.
        ValueAssignmentError: If the token cannot be converted.
    """
    if descriptor.has_adapter:
        return _parse_with(_new_adapter(descriptor), descriptor, token)

    kind = scalar_kind_of(descriptor.declared_type)
    if kind is None:
        raise StructuralError(
            f"Could not set value '{token}' of field '{descriptor.name}' of "
            f"{descriptor.owner_name}, because the field is of type "
            f"{descriptor.declared_type!r}, which is neither a primitive type nor str, "
            "and no type adapter was provided."
        )
    try:
        return kind.parse(token)
    except ValueError as error:
        raise ValueAssignmentError(
            f"Could not convert value '{token}' for field '{descriptor.name}' of "
            f"{descriptor.owner_name} to {kind.name}: {error}",
            field_name=descriptor.name,
            token=token,
            target_type=descriptor.declared_type,
        ) from error


def _expected_class(declared_type: Any) -> type | None:
    declared_type = unwrap_optional(declared_type)
    if declared_type is Any:
        return None
    kind = scalar_kind_of(declared_type)
    if kind is not None:
        supertype = getattr(kind.types[-1], "__supertype__", kind.types[-1])
        return supertype if isinstance(supertype, type) else None
    origin = get_origin(declared_type) or declared_type
    return origin if isinstance(origin, type) else None


def _store(
    target: Any, descriptor: FieldDescriptor, value: Any, token: str | None
) -> None:
    expected = _expected_class(descriptor.declared_type)
    if (
        descriptor.role is not Role.VARIADIC_TAIL
        and expected is not None
        and value is not None
        and expected is not object
        and not isinstance(value, expected)
        and not (expected is float and type(value) is int)
    ):
        raise ValueAssignmentError(
            f"Could not set value {value!r} to field '{descriptor.name}' of "
            f"{descriptor.owner_name}: expected {expected.__name__}, got "
            f"{type(value).__name__}.",
            field_name=descriptor.name,
            token=token,
            target_type=descriptor.declared_type,
        )
    try:
        setattr(target, descriptor.name, value)
    except FrozenInstanceError as error:
        raise StructuralError(
            f"Could not set field '{descriptor.name}' of {descriptor.owner_name}: "
            "the target is a frozen dataclass."
        ) from error
    except (AttributeError, TypeError) as error:
        raise ValueAssignmentError(
            f"Could not set value {value!r} to field '{descriptor.name}' of "
            f"{descriptor.owner_name}: {error}",
            field_name=descriptor.name,
            token=token,
            target_type=descriptor.declared_type,
        ) from error


def _bind_positional(
    descriptor: FieldDescriptor, model: ParsedModel, target: Any
) -> None:
    token = model.argument_value(descriptor.display_name)
    if token is None:
        return
    _store(target, descriptor, convert_token(descriptor, token), token)


def _bind_option(descriptor: FieldDescriptor, model: ParsedModel, target: Any) -> None:
    if descriptor.expects_value:
        token = model.option_value(descriptor.key)
        if token is None:
            return
        _store(target, descriptor, convert_token(descriptor, token), token)
        return

    if unwrap_optional(descriptor.declared_type) is not bool:
        raise StructuralError(
            f"Option field '{descriptor.name}' of {descriptor.owner_name} has to be of "
            "type bool or must expect a value."
        )
    _store(target, descriptor, model.is_option_present(descriptor.key), None)


def _bind_var_args(descriptor: FieldDescriptor, model: ParsedModel, target: Any) -> None:
    if not descriptor.has_adapter:
        raise StructuralError(
            f"Variadic tail field '{descriptor.name}' of {descriptor.owner_name} "
            "requires an adapter for its elements."
        )
    factory = descriptor.container_factory()
    try:
        container = factory()
    except Exception as error:
        raise InvalidTargetTypeError(
            f"Could not instantiate variadic tail container {factory!r} at field "
            f"'{descriptor.name}' of {descriptor.owner_name}: {error}"
        ) from error
    add = getattr(container, "append", None) or getattr(container, "add", None)
    if add is None:
        raise StructuralError(
            f"Variadic tail container {type(container).__name__} of field "
            f"'{descriptor.name}' of {descriptor.owner_name} supports neither append "
            "nor add."
        )

    adapter = _new_adapter(descriptor)
    for token in model.leftover_tokens():
        add(_parse_with(adapter, descriptor, token))
    _store(target, descriptor, container, None)


_BINDERS = {
    Role.POSITIONAL: _bind_positional,
    Role.OPTION: _bind_option,
    Role.VARIADIC_TAIL: _bind_var_args,
}


def bind(specification: ArgumentSpecification, model: ParsedModel, target: Any) -> Any:
    """
    Populate `target` from `model` according to `specification`.

    Args:
        specification (ArgumentSpecification): The target type's specification.
        model (ParsedModel): The parsed command line.
        target (Any): A fresh instance of the target type.

    Returns:
        Any: `target`, for chaining.

    Raises:
        StructuralError: If a descriptor cannot be bound at all.
        ValueAssignmentError: If a token cannot be converted or stored.
    """
    for descriptor in specification.descriptors:
        _BINDERS[descriptor.role](descriptor, model, target)
        logger.debug("Bound %s = %r", descriptor, getattr(target, descriptor.name))
    return target
