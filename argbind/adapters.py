# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `TypeAdapter` contract and a set of stock adapters.

A type adapter converts one command line token into a value of an arbitrary
type. Fields declare adapters as zero-argument *factories*; the binder calls
the factory to obtain a fresh adapter for each bind:

    @dataclass
    class Args:
        day: date = argument(0, adapter=partial(DateAdapter, "%Y%m%d"))
        color: Color = option("c", expects_value=True, adapter=partial(EnumAdapter, Color))
        words: list[str] = var_args(adapter=IdentityAdapter)

`NoAdapter` is the reserved marker meaning "convert with the primitive table".
It is never meant to be invoked.

Adapters report bad input by raising `ValueError`; the binder wraps it in a
`ValueAssignmentError` naming the field and token.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import EnumMeta
from pathlib import Path
from typing import Any, Callable

from dateutil import parser as date_parser

from argbind.exceptions import StructuralError

AdapterFactory = Callable[[], "TypeAdapter"]


class TypeAdapter(ABC):
    """Converts a single command line token into a value."""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """
        Parse `text` into a value.

        Raises:
            ValueError: If `text` cannot be converted.
        """
        raise NotImplementedError


class NoAdapter(TypeAdapter):
    """Marker for the absence of an explicitly declared adapter."""

    def parse(self, text: str) -> Any:
        raise StructuralError(
            "NoAdapter only marks the absence of a type adapter and cannot parse "
            f"values (got {text!r})."
        )


def is_no_adapter(factory: Any) -> bool:
    """Return True if `factory` is the reserved no-adapter marker."""
    return factory is None or factory is NoAdapter


class FunctionAdapter(TypeAdapter):
    """Wraps a plain `str -> value` callable."""

    def __init__(self, function: Callable[[str], Any]) -> None:
        if not callable(function):
            raise TypeError(f"{function!r} is not callable")
        self.function = function

    def parse(self, text: str) -> Any:
        return self.function(text)

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", repr(self.function))
        return f"FunctionAdapter({name})"


class IdentityAdapter(TypeAdapter):
    def parse(self, text: str) -> str:
        return text


class SplitAdapter(TypeAdapter):
    """Splits one token into a list of words."""

    def __init__(self, separator: str | None = " ") -> None:
        self.separator = separator

    def parse(self, text: str) -> list[str]:
        return text.split(self.separator)


class PathAdapter(TypeAdapter):
    def parse(self, text: str) -> Path:
        if not text:
            raise ValueError("An empty string is not a valid path")
        return Path(text).expanduser()


class EnumAdapter(TypeAdapter):
    """
    Converts a token to an Enum member.

    Tries to resolve by name first, then by value coerced to the type of the
    enum's values.
    """

    def __init__(self, enum_type: EnumMeta) -> None:
        if not isinstance(enum_type, EnumMeta):
            raise TypeError(f"{enum_type!r} is not an Enum type")
        self.enum_type = enum_type

    def parse(self, text: str) -> Any:
        try:
            return self.enum_type[text]
        except KeyError:
            pass

        members = list(self.enum_type)
        if members:
            base_type = type(members[0].value)
            try:
                return self.enum_type(base_type(text))
            except (ValueError, TypeError):
                pass
        values = [str(member.value) for member in members]
        raise ValueError(f"'{text}' should be one of {{{', '.join(values)}}}")


class DateTimeAdapter(TypeAdapter):
    """
    Converts a token to a `datetime`.

    With a format the token must match it exactly (`datetime.strptime`),
    otherwise the token is parsed leniently with `dateutil`.
    """

    def __init__(self, fmt: str | None = None) -> None:
        self.fmt = fmt

    def parse(self, text: str) -> datetime:
        try:
            if self.fmt:
                return datetime.strptime(text, self.fmt)
            return date_parser.parse(text)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{text}' could not be parsed as a datetime") from error


class DateAdapter(DateTimeAdapter):
    def parse(self, text: str) -> date:
        return super().parse(text).date()


def adapter_for(function: Callable[[str], Any]) -> AdapterFactory:
    """Return an adapter factory wrapping a plain `str -> value` callable."""
    if not callable(function):
        raise TypeError(f"{function!r} is not callable")

    def factory() -> TypeAdapter:
        return FunctionAdapter(function)

    factory.__name__ = f"adapter_for_{getattr(function, '__name__', 'callable')}"
    return factory
