# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argbind.

Two orthogonal families are kept apart so callers can tell "your target type
is malformed" (fix the type) from "the user's input was malformed" (fix argv):

Exception Hierarchy:
- ArgBindError
    ├── InvalidTargetTypeError
    │   └── StructuralError
    ├── ValueAssignmentError
    └── ArgumentParseError
        ├── MissingArgumentError
        ├── MissingOptionValueError
        └── UnknownArgumentError

`InvalidTargetTypeError` and `StructuralError` depend on the target type
alone and are programmer errors. `ValueAssignmentError` and the
`ArgumentParseError` family depend on the command line of one invocation.
"""
from typing import Any


class ArgBindError(Exception):
    """Base exception for argbind."""


class InvalidTargetTypeError(ArgBindError):
    """Exception raised when a target type cannot be used for binding."""


class StructuralError(InvalidTargetTypeError):
    """Exception raised when the argument tags of a target type are misconfigured."""


class ValueAssignmentError(ArgBindError):
    """Exception raised when a command line token cannot be converted or stored."""

    def __init__(
        self,
        message: str,
        field_name: str = "",
        token: str | None = None,
        target_type: Any = None,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.token = token
        self.target_type = target_type


class ArgumentParseError(ArgBindError):
    """Exception raised when the command line does not match the specification."""


class MissingArgumentError(ArgumentParseError):
    """Exception raised when a mandatory positional argument is missing."""


class MissingOptionValueError(ArgumentParseError):
    """Exception raised when an option that expects a value has none."""


class UnknownArgumentError(ArgumentParseError):
    """Exception raised for tokens that match no argument or option."""
