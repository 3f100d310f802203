# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the descriptors produced by the specification builder.

- `Role`: the role a field plays on the command line.
- `FieldDescriptor`: one classified field (name, declared type, role, tag).
- `ArgumentSpecification`: the frozen set of descriptors for one target type,
  handed to the token parser and to the binder.

Descriptors are immutable and may be shared between any number of bind calls.
"""
from __future__ import annotations

import inspect
from collections.abc import Collection, Mapping
from collections.abc import Set as AbstractSet
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, get_origin

from argbind.adapters import is_no_adapter
from argbind.exceptions import StructuralError
from argbind.primitives import unwrap_optional
from argbind.tags import Option, Positional, VariadicTail


def container_origin(declared_type: Any) -> type | None:
    """Return the container class behind `declared_type`, or None if it is not one."""
    declared_type = unwrap_optional(declared_type)
    origin = get_origin(declared_type) or declared_type
    if not isinstance(origin, type):
        return None
    if not issubclass(origin, Collection) or issubclass(
        origin, (str, bytes, bytearray, Mapping)
    ):
        return None
    return origin


class Role(Enum):
    """The command line role of a dataclass field."""

    POSITIONAL = "positional"
    OPTION = "option"
    VARIADIC_TAIL = "variadic_tail"
    UNANNOTATED = "unannotated"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldDescriptor:
    """A classified field of a target type."""

    name: str
    declared_type: Any
    role: Role
    tag: Positional | Option | VariadicTail | None = None
    owner: type | None = None

    @property
    def display_name(self) -> str:
        if isinstance(self.tag, Positional) and self.tag.name:
            return self.tag.name
        return self.name

    @property
    def index(self) -> int:
        assert isinstance(self.tag, Positional), "index is only defined for positionals"
        return self.tag.index

    @property
    def mandatory(self) -> bool:
        return isinstance(self.tag, Positional) and self.tag.mandatory

    @property
    def key(self) -> str:
        assert isinstance(self.tag, Option), "key is only defined for options"
        return self.tag.key

    @property
    def long_key(self) -> str:
        """Long key without leading dashes, or an empty string."""
        assert isinstance(self.tag, Option), "long_key is only defined for options"
        return self.tag.long_key.lstrip("-")

    @property
    def expects_value(self) -> bool:
        return isinstance(self.tag, Option) and self.tag.expects_value

    @property
    def description(self) -> str:
        return getattr(self.tag, "description", "")

    @property
    def adapter(self) -> Any:
        return getattr(self.tag, "adapter", None)

    @property
    def has_adapter(self) -> bool:
        return not is_no_adapter(self.adapter)

    @property
    def owner_name(self) -> str:
        return getattr(self.owner, "__qualname__", repr(self.owner))

    def container_factory(self) -> Callable[[], Any]:
        """
        Return the factory for the variadic tail container.

        An explicit `collection_type` wins. Otherwise the declared container type
        is used when it is concrete and supports `append` or `add`; abstract
        sequence types fall back to `list` and abstract set types to `set`.

        Raises:
            StructuralError: If the declared type is not a usable container.
        """
        assert isinstance(self.tag, VariadicTail), "only variadic tails have containers"
        if self.tag.collection_type is not None:
            if not callable(self.tag.collection_type):
                raise StructuralError(
                    f"collection_type {self.tag.collection_type!r} of variadic tail "
                    f"field '{self.name}' of {self.owner_name} is not callable."
                )
            return self.tag.collection_type

        origin = container_origin(self.declared_type)
        if origin is None:
            raise StructuralError(
                f"Variadic tail field '{self.name}' of {self.owner_name} has to be "
                f"a collection, not {self.declared_type!r}."
            )
        if inspect.isabstract(origin):
            return set if issubclass(origin, AbstractSet) else list
        if hasattr(origin, "append") or hasattr(origin, "add"):
            return origin
        raise StructuralError(
            f"Variadic tail field '{self.name}' of {self.owner_name} is declared as "
            f"{origin.__name__}, which supports neither append nor add. "
            "Declare a collection_type."
        )

    def __str__(self) -> str:
        return f"{self.owner_name}.{self.name}"


@dataclass(frozen=True)
class ArgumentSpecification:
    """
    The formal argument specification of one target type.

    Attributes:
        target_type (type): The dataclass the specification was built from.
        positional (tuple[FieldDescriptor, ...]): Positional descriptors in index order.
        options (tuple[FieldDescriptor, ...]): Option descriptors in declaration order.
        var_args (FieldDescriptor | None): The variadic tail descriptor, if any.
        unannotated (tuple[FieldDescriptor, ...]): Fields the binder ignores.
    """

    target_type: type
    positional: tuple[FieldDescriptor, ...] = ()
    options: tuple[FieldDescriptor, ...] = ()
    var_args: FieldDescriptor | None = None
    unannotated: tuple[FieldDescriptor, ...] = ()
    _by_key: dict[str, FieldDescriptor] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_key = {}
        for descriptor in self.options:
            by_key[descriptor.key] = descriptor
            if descriptor.long_key:
                by_key[descriptor.long_key] = descriptor
        object.__setattr__(self, "_by_key", by_key)

    @property
    def has_var_args(self) -> bool:
        return self.var_args is not None

    @property
    def descriptors(self) -> tuple[FieldDescriptor, ...]:
        """All bound descriptors: positionals, options, then the variadic tail."""
        tail = (self.var_args,) if self.var_args is not None else ()
        return self.positional + self.options + tail

    def option_for(self, key: str) -> FieldDescriptor | None:
        """Look up an option by short key or long key (without dashes)."""
        return self._by_key.get(key)

    def __str__(self) -> str:
        return (
            f"ArgumentSpecification({self.target_type.__qualname__}: "
            f"positional={len(self.positional)}, options={len(self.options)}, "
            f"var_args={self.has_var_args})"
        )
