# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the tag records that mark dataclass fields as command line arguments,
and the field helpers used to declare them.

A field carries its tag in `dataclasses.field(metadata=...)`. Each tag kind is
stored under its own metadata key, so the classifier can detect a field that
was (illegally) given more than one role.

Tags:
- `Positional`: a token identified by its position (`index`).
- `Option`: a token identified by a short `key` and an optional `long_key`,
  either a presence switch or carrying a value.
- `VariadicTail`: the leftover plain tokens, collected into a container.

Helpers:
- `argument(...)`, `option(...)`, `var_args(...)`: keyword-only dataclass fields
  carrying one tag.
- `tags(*tags)`: the raw metadata mapping, for hand-written `field()` calls.

Example:
    @dataclass
    class CopyArgs:
        source: str = argument(0, description="File to copy")
        target: str = argument(1, mandatory=False, default=".")
        verbose: bool = option("v", "verbose")
        retries: int = option("r", expects_value=True, default=3)
        extra: list[str] = var_args(converter=str)
"""
from __future__ import annotations

from dataclasses import MISSING, dataclass, field
from typing import Any, Callable

from argbind.adapters import AdapterFactory, adapter_for

POSITIONAL_KEY = "argbind.positional"
OPTION_KEY = "argbind.option"
VARIADIC_TAIL_KEY = "argbind.variadic_tail"


@dataclass(frozen=True)
class Positional:
    """
    Marks a field as a positional argument.

    Attributes:
        index (int): Zero-based position. Indices of a type must form `0..N-1`.
        name (str): Display name. Defaults to the field name.
        mandatory (bool): Whether the parser must see a token for it.
        description (str): Help text.
        adapter (AdapterFactory | None): Factory for a custom `TypeAdapter`.
    """

    index: int
    name: str = ""
    mandatory: bool = True
    description: str = ""
    adapter: AdapterFactory | None = None


@dataclass(frozen=True)
class Option:
    """
    Marks a field as an option.

    Attributes:
        key (str): Single character short key (`-k`).
        long_key (str): Optional long alias (`--long-key`), given with or without dashes.
        expects_value (bool): False makes the option a presence switch on a bool field.
        description (str): Help text.
        adapter (AdapterFactory | None): Factory for a custom `TypeAdapter`.
    """

    key: str
    long_key: str = ""
    expects_value: bool = False
    description: str = ""
    adapter: AdapterFactory | None = None


@dataclass(frozen=True)
class VariadicTail:
    """
    Marks a container field as the receiver of all leftover plain tokens.

    Attributes:
        adapter (AdapterFactory | None): Factory for the element adapter. Required.
        collection_type (Callable[[], Any] | None): Factory for the container.
            Defaults to the declared container type, or `list`.
        description (str): Help text.
    """

    adapter: AdapterFactory | None = None
    collection_type: Callable[[], Any] | None = None
    description: str = ""


_METADATA_KEYS: dict[type, str] = {
    Positional: POSITIONAL_KEY,
    Option: OPTION_KEY,
    VariadicTail: VARIADIC_TAIL_KEY,
}


def tags(*declared: Positional | Option | VariadicTail) -> dict[str, Any]:
    """Return field metadata carrying the given tags."""
    metadata: dict[str, Any] = {}
    for tag in declared:
        key = _METADATA_KEYS.get(type(tag))
        if key is None:
            raise TypeError(f"{tag!r} is not an argument tag")
        metadata[key] = tag
    return metadata


def _resolve_adapter(
    adapter: AdapterFactory | None, converter: Callable[[str], Any] | None
) -> AdapterFactory | None:
    if adapter is not None and converter is not None:
        raise TypeError("Pass either 'adapter' or 'converter', not both")
    if converter is not None:
        return adapter_for(converter)
    return adapter


def _tagged_field(tag: Any, default: Any, default_factory: Any) -> Any:
    kwargs: dict[str, Any] = {}
    if default is not MISSING:
        kwargs["default"] = default
    if default_factory is not MISSING:
        kwargs["default_factory"] = default_factory
    return field(metadata=tags(tag), kw_only=True, **kwargs)


def argument(
    index: int,
    name: str = "",
    *,
    mandatory: bool = True,
    description: str = "",
    adapter: AdapterFactory | None = None,
    converter: Callable[[str], Any] | None = None,
    default: Any = MISSING,
    default_factory: Any = MISSING,
) -> Any:
    """Declare a positional argument field."""
    tag = Positional(
        index=index,
        name=name,
        mandatory=mandatory,
        description=description,
        adapter=_resolve_adapter(adapter, converter),
    )
    return _tagged_field(tag, default, default_factory)


def option(
    key: str,
    long_key: str = "",
    *,
    expects_value: bool = False,
    description: str = "",
    adapter: AdapterFactory | None = None,
    converter: Callable[[str], Any] | None = None,
    default: Any = MISSING,
    default_factory: Any = MISSING,
) -> Any:
    """Declare an option field. Switches default to False."""
    tag = Option(
        key=key,
        long_key=long_key,
        expects_value=expects_value,
        description=description,
        adapter=_resolve_adapter(adapter, converter),
    )
    if not expects_value and default is MISSING and default_factory is MISSING:
        default = False
    return _tagged_field(tag, default, default_factory)


def var_args(
    adapter: AdapterFactory | None = None,
    *,
    converter: Callable[[str], Any] | None = None,
    collection_type: Callable[[], Any] | None = None,
    description: str = "",
) -> Any:
    """Declare the variadic tail field."""
    tag = VariadicTail(
        adapter=_resolve_adapter(adapter, converter),
        collection_type=collection_type,
        description=description,
    )
    return _tagged_field(tag, MISSING, collection_type or list)
