"""
argbind

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .adapters import (
    DateAdapter,
    DateTimeAdapter,
    EnumAdapter,
    FunctionAdapter,
    IdentityAdapter,
    NoAdapter,
    PathAdapter,
    SplitAdapter,
    TypeAdapter,
    adapter_for,
)
from .binder import bind, create_target
from .builder import build_specification, get_specification
from .descriptors import ArgumentSpecification, FieldDescriptor, Role
from .exceptions import (
    ArgBindError,
    ArgumentParseError,
    InvalidTargetTypeError,
    MissingArgumentError,
    MissingOptionValueError,
    StructuralError,
    UnknownArgumentError,
    ValueAssignmentError,
)
from .mapper import ObjectMapper, parse_args
from .options import BindOptions
from .primitives import Char, Float32, Float64, Int8, Int16, Int32, Int64
from .tags import Option, Positional, VariadicTail, argument, option, tags, var_args
from .version import __version__

__all__ = [
    "__version__",
    "ArgBindError",
    "ArgumentParseError",
    "ArgumentSpecification",
    "BindOptions",
    "Char",
    "DateAdapter",
    "DateTimeAdapter",
    "EnumAdapter",
    "FieldDescriptor",
    "Float32",
    "Float64",
    "FunctionAdapter",
    "IdentityAdapter",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidTargetTypeError",
    "MissingArgumentError",
    "MissingOptionValueError",
    "NoAdapter",
    "ObjectMapper",
    "Option",
    "PathAdapter",
    "Positional",
    "Role",
    "SplitAdapter",
    "StructuralError",
    "TypeAdapter",
    "UnknownArgumentError",
    "ValueAssignmentError",
    "VariadicTail",
    "adapter_for",
    "argument",
    "bind",
    "build_specification",
    "get_specification",
    "option",
    "parse_args",
    "tags",
    "var_args",
]
