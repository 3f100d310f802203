# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `BindOptions`, the explicit configuration value passed to the top-level
binding entry points (`ObjectMapper`, `parse_args`).

There is no process-wide toggle: whether a help request short-circuits binding
and prints usage is decided per mapper or per call.

Example:
    options = BindOptions(print_usage_on_help=False, program="copy-tool")
    result = parse_args(CopyArgs, ["src", "dst"], options=options)
"""
from pydantic import BaseModel, ConfigDict, field_validator


class BindOptions(BaseModel):
    """
    Configuration for one mapper or one `parse_args` call.

    Attributes:
        print_usage_on_help (bool): Print usage and return `None` when a help token
            is given. When False, help tokens are treated like any other token.
        program (str | None): Program name shown in usage. Defaults to the
            current program invocation.
        help_tokens (tuple[str, ...]): Tokens recognized as a help request.
    """

    model_config = ConfigDict(frozen=True)

    print_usage_on_help: bool = True
    program: str | None = None
    help_tokens: tuple[str, ...] = ("-h", "--help")

    @field_validator("help_tokens")
    @classmethod
    def validate_help_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for token in value:
            if not token.startswith("-") or token.strip("-") == "":
                raise ValueError(f"Help token '{token}' must be a flag like '-h'")
        return value
