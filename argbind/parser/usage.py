# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders usage and help text for an `ArgumentSpecification` using Rich.

Functions:
- get_usage: One-line usage string, e.g. `copy [-v] [-r RETRIES] source [target] [extra ...]`.
- render_usage: Print usage followed by `positional:` and `options:` sections.
"""
from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape

from argbind.console import console as default_console
from argbind.descriptors import ArgumentSpecification, FieldDescriptor


def _metavar(descriptor: FieldDescriptor) -> str:
    return (descriptor.long_key or descriptor.name).replace("-", "_").upper()


def _option_flags(descriptor: FieldDescriptor) -> str:
    flags = [f"-{descriptor.key}"]
    if descriptor.long_key:
        flags.append(f"--{descriptor.long_key}")
    text = ", ".join(flags)
    if descriptor.expects_value:
        text = f"{text} {_metavar(descriptor)}"
    return text


def get_usage(specification: ArgumentSpecification, program: str = "") -> str:
    """
    Render the usage line for `specification`.

    Returns:
        str: Plain text usage, without markup.
    """
    parts = [program] if program else []
    for descriptor in specification.options:
        if descriptor.expects_value:
            parts.append(f"[-{descriptor.key} {_metavar(descriptor)}]")
        else:
            parts.append(f"[-{descriptor.key}]")
    for descriptor in specification.positional:
        if descriptor.mandatory:
            parts.append(descriptor.display_name)
        else:
            parts.append(f"[{descriptor.display_name}]")
    if specification.var_args is not None:
        parts.append(f"[{specification.var_args.name} ...]")
    return " ".join(parts)


def _print_line(console: Console, flags: str, help_text: str) -> None:
    arg_line = f"  {escape(flags):<30} "
    if help_text and len(flags) > 30:
        help_text = f"\n{'':<33}{help_text}"
    console.print(f"{arg_line}{escape(help_text)}")


def render_usage(
    specification: ArgumentSpecification,
    program: str = "",
    console: Console | None = None,
    help_tokens: Sequence[str] = ("-h", "--help"),
) -> None:
    """
    Print formatted usage and argument help for `specification`.

    Args:
        specification (ArgumentSpecification): What to describe.
        program (str): Program name shown at the start of the usage line.
        console (Console | None): Where to print. Defaults to the shared console.
        help_tokens (Sequence[str]): Help tokens to list under options.
    """
    console = console or default_console
    usage = get_usage(specification, program)
    console.print(f"[bold]usage: {escape(usage)}[/bold]\n")

    if specification.positional or specification.var_args is not None:
        console.print("[bold]positional:[/bold]")
        for descriptor in specification.positional:
            _print_line(console, descriptor.display_name, descriptor.description)
        if specification.var_args is not None:
            _print_line(
                console,
                f"{specification.var_args.name} ...",
                specification.var_args.description,
            )

    if specification.options or help_tokens:
        console.print("[bold]options:[/bold]")
        if help_tokens:
            _print_line(console, ", ".join(help_tokens), "Show this help message.")
        for descriptor in specification.options:
            _print_line(console, _option_flags(descriptor), descriptor.description)
