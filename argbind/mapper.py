# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Top-level entry points mapping a command line onto a target dataclass.

The flow is build -> parse -> bind:

1. The target type's `ArgumentSpecification` is built once (and cached).
2. A `TokenParser` turns argv into an `ArgumentModel`.
3. A fresh target instance is created and populated by the binder.

Parse errors (`ArgumentParseError`) propagate unchanged. When
`BindOptions.print_usage_on_help` is set, a help token prints usage and the
entry points return None instead of an instance.

Example Usage:
    @dataclass
    class Args:
        name: str = argument(0)
        verbose: bool = option("v", "verbose")

    args = parse_args(Args, ["foo", "-v"])
    # Args(name='foo', verbose=True)

    mapper = ObjectMapper(Args, BindOptions(program="greet"))
    mapper.render_usage()
"""
from __future__ import annotations

import sys
from typing import Generic, Sequence, TypeVar

from rich.console import Console

from argbind.binder import bind, create_target
from argbind.builder import get_specification
from argbind.descriptors import ArgumentSpecification
from argbind.logger import logger
from argbind.options import BindOptions
from argbind.parser.token_parser import TokenParser
from argbind.parser.usage import get_usage, render_usage
from argbind.signals import HelpSignal
from argbind.utils import get_program_invocation

T = TypeVar("T")


class ObjectMapper(Generic[T]):
    """
    Maps command lines onto instances of one target type.

    The specification and the parser are built once in the constructor, so a
    malformed target type fails here rather than on the first parse.

    Args:
        target_type (type[T]): A dataclass with argument tags.
        options (BindOptions | None): Help handling and program name.
        console (Console | None): Where usage is printed.

    Raises:
        InvalidTargetTypeError: If the target type is not usable.
        StructuralError: If the target type's tags are misconfigured.
    """

    def __init__(
        self,
        target_type: type[T],
        options: BindOptions | None = None,
        console: Console | None = None,
    ) -> None:
        self.target_type: type[T] = target_type
        self.options: BindOptions = options or BindOptions()
        self.console: Console | None = console
        self.specification: ArgumentSpecification = get_specification(target_type)
        self.parser: TokenParser = TokenParser(
            self.specification,
            help_tokens=self.options.help_tokens,
            handle_help=self.options.print_usage_on_help,
        )

    @property
    def program(self) -> str:
        return self.options.program or get_program_invocation()

    def get_usage(self) -> str:
        return get_usage(self.specification, self.program)

    def render_usage(self) -> None:
        render_usage(
            self.specification,
            self.program,
            console=self.console,
            help_tokens=self.parser.help_tokens,
        )

    def parse(self, args: Sequence[str] | None = None) -> T | None:
        """
        Parse `args` (default `sys.argv[1:]`) into a new instance of the target type.

        Returns:
            T | None: The populated instance, or None if usage was printed for a
            help request.

        Raises:
            ArgumentParseError: If `args` do not match the target type.
            ValueAssignmentError: If a token cannot be converted or stored.
            StructuralError: If a field cannot be bound at all.
        """
        if args is None:
            args = sys.argv[1:]
        try:
            model = self.parser.parse(args)
        except HelpSignal:
            self.render_usage()
            return None

        target = create_target(self.specification)
        bind(self.specification, model, target)
        logger.debug("Mapped %d token(s) onto %s", len(args), self.target_type.__qualname__)
        return target

    def __str__(self) -> str:
        return f"ObjectMapper({self.target_type.__qualname__}, {self.parser})"

    def __repr__(self) -> str:
        return str(self)


def parse_args(
    target_type: type[T],
    args: Sequence[str] | None = None,
    options: BindOptions | None = None,
    console: Console | None = None,
) -> T | None:
    """
    Parse `args` into a new instance of `target_type`.

    Shorthand for `ObjectMapper(target_type, options, console).parse(args)`.
    """
    return ObjectMapper(target_type, options, console).parse(args)
