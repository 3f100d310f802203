# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `TokenParser`, the default parser turning raw argv
tokens into an `ArgumentModel` for a given `ArgumentSpecification`.

The parser only tokenizes and validates the *shape* of the command line. It
never converts values: every token is handed to the binder as text.

Key Features:
- Short keys (`-v`), long keys (`--verbose`) and inline values (`--bar=3`)
- Attached short values (`-b1024`) and POSIX-style bundling of switches (`-abc`)
- Negative numbers are plain tokens unless declared as keys
- `--` ends option processing
- Positionals are filled in index order, extra plain tokens go to the
  variadic tail when one is declared
- Help tokens (`-h`, `--help`) anywhere before `--` raise `HelpSignal` before any
  other token is looked at, unless an option claims them

Errors:
- `MissingArgumentError`: a mandatory positional received no token.
- `MissingOptionValueError`: a value option is last or followed by another option.
- `UnknownArgumentError`: an undeclared option, or a plain token with nowhere to go.

Example Usage:
    parser = TokenParser(get_specification(CopyArgs))
    model = parser.parse(["a.txt", "-v", "-r", "5"])
    model.argument_value("source")  # 'a.txt'
    model.is_option_present("v")    # True
"""
from __future__ import annotations

import re
from typing import Sequence

from argbind.descriptors import ArgumentSpecification, FieldDescriptor
from argbind.exceptions import (
    ArgumentParseError,
    MissingArgumentError,
    MissingOptionValueError,
    UnknownArgumentError,
)
from argbind.logger import logger
from argbind.parser.argument_model import ArgumentModel
from argbind.signals import HelpSignal

END_OF_OPTIONS = "--"


_NEGATIVE_NUMBER = re.compile(
    r"-(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)


def _looks_like_number(token: str) -> bool:
    return _NEGATIVE_NUMBER.fullmatch(token) is not None


class TokenParser:
    """
    Tokenizes a command line against an `ArgumentSpecification`.

    Args:
        specification (ArgumentSpecification): What to expect on the command line.
        help_tokens (Sequence[str]): Tokens that request help.
        handle_help (bool): Raise `HelpSignal` on a help token. When False, help
            tokens are parsed like any other token.
    """

    def __init__(
        self,
        specification: ArgumentSpecification,
        help_tokens: Sequence[str] = ("-h", "--help"),
        handle_help: bool = True,
    ) -> None:
        self.specification: ArgumentSpecification = specification
        self.handle_help: bool = handle_help
        self._flag_map: dict[str, FieldDescriptor] = {}
        for descriptor in specification.options:
            self._flag_map[f"-{descriptor.key}"] = descriptor
            if descriptor.long_key:
                self._flag_map[f"--{descriptor.long_key}"] = descriptor
        self.help_tokens: tuple[str, ...] = tuple(
            token for token in help_tokens if token not in self._flag_map
        )

    def is_help(self, args: Sequence[str]) -> bool:
        """Return True if `args` contain a help token before `--`."""
        for token in args:
            if token == END_OF_OPTIONS:
                return False
            if token in self.help_tokens:
                return True
        return False

    def _is_flag_token(self, token: str) -> bool:
        if not token.startswith("-") or token == "-":
            return False
        if token in self._flag_map:
            return True
        return not _looks_like_number(token)

    def _is_known_flag(self, token: str) -> bool:
        if token == END_OF_OPTIONS or token in self._flag_map:
            return True
        if token.startswith("--") and "=" in token:
            return token.partition("=")[0] in self._flag_map
        return self.handle_help and token in self.help_tokens

    def _raise_unknown_option(self, token: str) -> None:
        candidates = sorted(flag for flag in self._flag_map if flag.startswith(token))
        if candidates:
            raise UnknownArgumentError(
                f"Unrecognized option '{token}'. Did you mean one of: "
                f"{', '.join(candidates)}?"
            )
        raise UnknownArgumentError(
            f"Unrecognized option '{token}'. Use --help to see available options."
        )

    def _set_option(
        self, model: ArgumentModel, descriptor: FieldDescriptor, value: str | None
    ) -> None:
        if descriptor.key in model.options:
            logger.debug("Option '-%s' given more than once, last one wins", descriptor.key)
        model.options[descriptor.key] = value

    def _consume_option(
        self,
        descriptor: FieldDescriptor,
        token: str,
        args: Sequence[str],
        i: int,
        model: ArgumentModel,
    ) -> int:
        if not descriptor.expects_value:
            self._set_option(model, descriptor, None)
            return i + 1
        if i + 1 >= len(args) or self._is_known_flag(args[i + 1]):
            raise MissingOptionValueError(f"Option '{token}' expects a value.")
        self._set_option(model, descriptor, args[i + 1])
        return i + 2

    def _handle_long(
        self, token: str, args: Sequence[str], i: int, model: ArgumentModel
    ) -> int:
        flag, separator, inline = token.partition("=")
        descriptor = self._flag_map.get(flag)
        if descriptor is None:
            self._raise_unknown_option(flag)
        assert descriptor is not None
        if not separator:
            return self._consume_option(descriptor, flag, args, i, model)
        if not descriptor.expects_value:
            raise ArgumentParseError(f"Option '{flag}' does not take a value.")
        self._set_option(model, descriptor, inline)
        return i + 1

    def _handle_short(
        self, token: str, args: Sequence[str], i: int, model: ArgumentModel
    ) -> int:
        descriptor = self._flag_map.get(token[:2])
        if len(token) == 2:
            if descriptor is None:
                self._raise_unknown_option(token)
            assert descriptor is not None
            return self._consume_option(descriptor, token, args, i, model)

        if descriptor is not None and descriptor.expects_value:
            # -b1024
            self._set_option(model, descriptor, token[2:])
            return i + 1

        # POSIX bundle, e.g. -abc -> -a -b -c
        bundle = [f"-{char}" for char in token[1:]]
        for position, flag in enumerate(bundle):
            bundled = self._flag_map.get(flag)
            if bundled is None:
                self._raise_unknown_option(flag)
            assert bundled is not None
            if position < len(bundle) - 1:
                if bundled.expects_value:
                    raise MissingOptionValueError(
                        f"Option '{flag}' expects a value and must be last in '{token}'."
                    )
                self._set_option(model, bundled, None)
            else:
                return self._consume_option(bundled, flag, args, i, model)
        return i + 1

    def _assign_plain(self, plain: list[str], model: ArgumentModel) -> None:
        positional = self.specification.positional
        for descriptor, token in zip(positional, plain):
            model.arguments[descriptor.display_name] = token
        extra = plain[len(positional) :]
        if not extra:
            return
        if not self.specification.has_var_args:
            raise UnknownArgumentError(
                f"Unexpected argument '{extra[0]}'. Expected at most "
                f"{len(positional)} positional argument(s)."
            )
        model.plain_arguments.extend(extra)

    def _check_mandatory(self, model: ArgumentModel) -> None:
        for descriptor in self.specification.positional:
            if descriptor.mandatory and descriptor.display_name not in model.arguments:
                help_text = f" help: {descriptor.description}" if descriptor.description else ""
                raise MissingArgumentError(
                    f"Missing required argument '{descriptor.display_name}'.{help_text}"
                )

    def parse(self, args: Sequence[str] | None = None) -> ArgumentModel:
        """
        Parse `args` into an `ArgumentModel`.

        Raises:
            HelpSignal: If help handling is on and a help token is found.
            ArgumentParseError: If the command line does not match the specification.
        """
        args = list(args or [])
        if self.handle_help and self.is_help(args):
            logger.debug("Help requested in %s", args)
            raise HelpSignal()

        model = ArgumentModel()
        plain: list[str] = []
        options_ended = False

        i = 0
        while i < len(args):
            token = args[i]
            if options_ended or not self._is_flag_token(token):
                plain.append(token)
                i += 1
            elif token == END_OF_OPTIONS:
                options_ended = True
                i += 1
            elif token.startswith("--"):
                i = self._handle_long(token, args, i, model)
            else:
                i = self._handle_short(token, args, i, model)

        self._assign_plain(plain, model)
        self._check_mandatory(model)
        return model

    def __str__(self) -> str:
        return (
            f"TokenParser(positional={len(self.specification.positional)}, "
            f"options={len(self.specification.options)}, "
            f"var_args={self.specification.has_var_args})"
        )

    def __repr__(self) -> str:
        return str(self)
