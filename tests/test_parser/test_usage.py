from dataclasses import dataclass

from rich.console import Console

from argbind.adapters import IdentityAdapter
from argbind.builder import build_specification
from argbind.parser import get_usage, render_usage
from argbind.tags import argument, option, var_args


@dataclass
class CopyArgs:
    source: str = argument(0, description="File to copy")
    target: str = argument(1, mandatory=False, default=".")
    verbose: bool = option("v", "verbose", description="Talk more")
    retries: int = option("r", expects_value=True, default=3, description="Retry count")
    dry_run: bool = option("n", "dry-run")
    extra: list[str] = var_args(IdentityAdapter, description="Extra files")


@dataclass
class Nothing:
    pass


def test_get_usage():
    spec = build_specification(CopyArgs)
    assert (
        get_usage(spec, "copy")
        == "copy [-v] [-r RETRIES] [-n] source [target] [extra ...]"
    )


def test_get_usage_without_program():
    assert get_usage(build_specification(Nothing)) == ""


def test_render_usage():
    console = Console(record=True, width=120, color_system=None)
    render_usage(build_specification(CopyArgs), "copy", console=console)
    output = console.export_text()
    assert "usage: copy [-v] [-r RETRIES] [-n] source [target] [extra ...]" in output
    assert "positional:" in output
    assert "File to copy" in output
    assert "extra ..." in output
    assert "Extra files" in output
    assert "options:" in output
    assert "-h, --help" in output
    assert "-v, --verbose" in output
    assert "-r RETRIES" in output
    assert "Retry count" in output
    assert "-n, --dry-run" in output


def test_render_usage_without_arguments():
    console = Console(record=True, width=120, color_system=None)
    render_usage(build_specification(Nothing), "noop", console=console, help_tokens=())
    output = console.export_text()
    assert "usage: noop" in output
    assert "positional:" not in output
    assert "options:" not in output
