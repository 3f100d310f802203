# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains the primitive conversion table used by the binder for implicit
text-to-value conversion.

Each `ScalarKind` maps one or more declared field types to a text parser and a
zero value. Sized numeric kinds are declared with `typing.NewType` so that a
field can state its width in its annotation:

    @dataclass
    class Args:
        port: Int16 = option("p", expects_value=True)
        ratio: Float32 = option("r", expects_value=True)

Builtin `int` and `float` map to the 64-bit kinds. `Optional[...]` annotations
are unwrapped before lookup.

Functions:
- scalar_kind_of: Return the table entry for a type (or None).
- is_supported_scalar: Whether a type converts implicitly.
- parse_scalar: Convert text using the entry for a type.
- zero_value: Zero value for a supported type.
"""
import math
import re
import struct
import types
from dataclasses import dataclass
from typing import Any, Callable, NewType, Union, get_args, get_origin

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)
Char = NewType("Char", str)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

TRUE_WORDS = frozenset({"true", "t", "1", "yes", "on"})
FALSE_WORDS = frozenset({"false", "f", "0", "no", "off"})


@dataclass(frozen=True)
class ScalarKind:
    """One entry of the primitive conversion table."""

    name: str
    types: tuple[Any, ...]
    parse: Callable[[str], Any]
    zero: Any

    def __repr__(self) -> str:
        return f"ScalarKind({self.name})"


def _integer_parser(bits: int) -> Callable[[str], int]:
    low = -(1 << (bits - 1))
    high = (1 << (bits - 1)) - 1

    def parse(text: str) -> int:
        digits = text.strip()
        if not _INTEGER_PATTERN.fullmatch(digits):
            raise ValueError(f"'{text}' is not a valid {bits}-bit integer")
        value = int(digits)
        if not low <= value <= high:
            raise ValueError(
                f"'{text}' is out of range for a {bits}-bit integer [{low}, {high}]"
            )
        return value

    return parse


def _parse_float64(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise ValueError(f"'{text}' is not a valid floating point number") from None


def _parse_float32(text: str) -> float:
    value = _parse_float64(text)
    try:
        single = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        single = math.inf
    if math.isinf(single) and not math.isinf(value):
        raise ValueError(f"'{text}' is out of range for a 32-bit float")
    return single


def _parse_char(text: str) -> str:
    if len(text) != 1:
        raise ValueError(f"'{text}' is not a single character")
    return text


def _parse_bool(text: str) -> bool:
    normalized = text.strip().lower()
    if normalized in TRUE_WORDS:
        return True
    if normalized in FALSE_WORDS:
        return False
    raise ValueError(f"'{text}' is not a valid boolean")


PRIMITIVES: tuple[ScalarKind, ...] = (
    ScalarKind("int8", (Int8,), _integer_parser(8), 0),
    ScalarKind("int16", (Int16,), _integer_parser(16), 0),
    ScalarKind("int32", (Int32,), _integer_parser(32), 0),
    ScalarKind("int64", (Int64, int), _integer_parser(64), 0),
    ScalarKind("float32", (Float32,), _parse_float32, 0.0),
    ScalarKind("float64", (Float64, float), _parse_float64, 0.0),
    ScalarKind("char", (Char,), _parse_char, " "),
    ScalarKind("bool", (bool,), _parse_bool, False),
    ScalarKind("str", (str,), lambda text: text, ""),
)

_BY_TYPE: dict[Any, ScalarKind] = {
    declared: kind for kind in PRIMITIVES for declared in kind.types
}


def unwrap_optional(target_type: Any) -> Any:
    """Return `X` for `Optional[X]` / `X | None`, else the type unchanged."""
    if isinstance(target_type, types.UnionType) or get_origin(target_type) is Union:
        args = [arg for arg in get_args(target_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return target_type


def scalar_kind_of(target_type: Any) -> ScalarKind | None:
    """Return the table entry for `target_type`, or None if it is not a scalar."""
    try:
        return _BY_TYPE.get(unwrap_optional(target_type))
    except TypeError:
        return None


def is_supported_scalar(target_type: Any) -> bool:
    return scalar_kind_of(target_type) is not None


def parse_scalar(text: str, target_type: Any) -> Any:
    """
    Convert `text` with the table entry for `target_type`.

    Raises:
        TypeError: If `target_type` is not in the table.
        ValueError: If `text` does not match the kind's grammar.
    """
    kind = scalar_kind_of(target_type)
    if kind is None:
        raise TypeError(f"{target_type!r} is not a supported scalar type")
    return kind.parse(text)


def zero_value(target_type: Any) -> Any:
    kind = scalar_kind_of(target_type)
    if kind is None:
        raise TypeError(f"{target_type!r} is not a supported scalar type")
    return kind.zero
