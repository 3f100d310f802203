# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the parsed model contract between a token parser and the binder.

A parsed model is the flat result of tokenizing argv against an
`ArgumentSpecification`:

- positional display name -> token (or absent)
- option key -> token (value options) or presence (switches)
- leftover plain tokens, in order, for the variadic tail

The binder only depends on the `ParsedModel` protocol, so any parser that
produces an object with these four methods can be used.
`ArgumentModel` is the implementation produced by `TokenParser`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class ParsedModel(Protocol):
    def argument_value(self, name: str) -> str | None: ...

    def option_value(self, key: str) -> str | None: ...

    def is_option_present(self, key: str) -> bool: ...

    def leftover_tokens(self) -> list[str]: ...


@dataclass
class ArgumentModel:
    """
    Result of parsing one command line.

    Attributes:
        arguments (dict[str, str]): Positional tokens by display name.
        options (dict[str, str | None]): Present options by short key. Switches
            map to None, value options to their token.
        plain_arguments (list[str]): Leftover plain tokens.
    """

    arguments: dict[str, str] = field(default_factory=dict)
    options: dict[str, str | None] = field(default_factory=dict)
    plain_arguments: list[str] = field(default_factory=list)

    def argument_value(self, name: str) -> str | None:
        return self.arguments.get(name)

    def option_value(self, key: str) -> str | None:
        return self.options.get(key)

    def is_option_present(self, key: str) -> bool:
        return key in self.options

    def leftover_tokens(self) -> list[str]:
        return list(self.plain_arguments)
