from dataclasses import dataclass

import pytest
from rich.console import Console

from argbind import (
    BindOptions,
    IdentityAdapter,
    Int32,
    MissingArgumentError,
    MissingOptionValueError,
    ObjectMapper,
    StructuralError,
    UnknownArgumentError,
    ValueAssignmentError,
    argument,
    option,
    parse_args,
    var_args,
)


@dataclass
class NameAndSwitch:
    name: str = argument(0)
    v: bool = option("v")


@dataclass
class MandatoryNameOptionalNumber:
    name: str = argument(0)
    n: Int32 = argument(1, mandatory=False, default=-1)


@dataclass
class AllOptional:
    name: str = argument(0, mandatory=False, default="nobody")
    n: Int32 = argument(1, mandatory=False, default=-1)


@dataclass
class ValueOption:
    x: str = argument(0)
    b: int = option("b", expects_value=True, default=-1)


@dataclass
class Tail:
    x: str = argument(0)
    rest: list[str] = var_args(IdentityAdapter)


@dataclass
class SwitchNotBoolean:
    count: int = option("c")


def quiet_console():
    return Console(record=True, width=100, color_system=None)


def test_scenario_switch_present():
    result = parse_args(NameAndSwitch, ["foo", "-v"])
    assert result == NameAndSwitch(name="foo", v=True)


def test_scenario_switch_absent():
    result = parse_args(NameAndSwitch, ["foo"])
    assert result == NameAndSwitch(name="foo", v=False)


def test_scenario_missing_mandatory_propagates():
    with pytest.raises(MissingArgumentError):
        parse_args(MandatoryNameOptionalNumber, [])


def test_scenario_all_optional_keeps_defaults():
    result = parse_args(AllOptional, [])
    assert result.name == "nobody"
    assert result.n == -1


def test_scenario_value_option():
    assert parse_args(ValueOption, ["x", "-b", "1024"]).b == 1024
    assert parse_args(ValueOption, ["x"]).b == -1


def test_scenario_missing_option_value_propagates():
    with pytest.raises(MissingOptionValueError):
        parse_args(ValueOption, ["x", "-b"])


def test_scenario_variadic_tail():
    result = parse_args(Tail, ["x", "a", "b", "c"])
    assert result.x == "x"
    assert result.rest == ["a", "b", "c"]


def test_bad_value_is_value_error():
    with pytest.raises(ValueAssignmentError):
        parse_args(ValueOption, ["x", "-b", "many"])


def test_unknown_token_propagates():
    with pytest.raises(UnknownArgumentError):
        parse_args(NameAndSwitch, ["foo", "bar"])


def test_structural_error_on_construction():
    with pytest.raises(StructuralError):
        ObjectMapper(SwitchNotBoolean)


def test_help_prints_usage_and_returns_none():
    console = quiet_console()
    result = parse_args(
        NameAndSwitch, ["--help"], BindOptions(program="greet"), console=console
    )
    assert result is None
    assert "usage: greet [-v] name" in console.export_text()


@pytest.mark.parametrize("args", [["--bogus", "--help"], ["x", "-b", "--help"]])
def test_help_is_checked_before_parsing(args):
    console = quiet_console()
    result = parse_args(ValueOption, args, BindOptions(program="tool"), console=console)
    assert result is None
    assert "usage: tool [-b B] x" in console.export_text()


def test_help_disabled_passes_help_as_value():
    options = BindOptions(print_usage_on_help=False)
    result = parse_args(Tail, ["x", "--", "--help"], options)
    assert result.rest == ["--help"]
    with pytest.raises(ValueAssignmentError):
        parse_args(ValueOption, ["x", "-b", "--help"], options)


def test_help_disabled_is_a_parse_error():
    options = BindOptions(print_usage_on_help=False)
    with pytest.raises(UnknownArgumentError):
        parse_args(NameAndSwitch, ["foo", "--help"], options)


def test_mapper_is_reusable():
    mapper = ObjectMapper(ValueOption)
    first = mapper.parse(["one", "-b", "1"])
    second = mapper.parse(["two"])
    assert first is not second
    assert (first.x, first.b) == ("one", 1)
    assert (second.x, second.b) == ("two", -1)


def test_failed_bind_does_not_affect_next_bind():
    mapper = ObjectMapper(ValueOption)
    with pytest.raises(ValueAssignmentError):
        mapper.parse(["x", "-b", "nope"])
    assert mapper.parse(["x", "-b", "2"]).b == 2


def test_parse_defaults_to_sys_argv(monkeypatch):
    monkeypatch.setattr("sys.argv", ["prog", "foo", "-v"])
    assert parse_args(NameAndSwitch) == NameAndSwitch(name="foo", v=True)


def test_mapper_usage():
    mapper = ObjectMapper(ValueOption, BindOptions(program="tool"))
    assert mapper.get_usage() == "tool [-b B] x"
    console = quiet_console()
    ObjectMapper(ValueOption, BindOptions(program="tool"), console=console).render_usage()
    assert "usage: tool [-b B] x" in console.export_text()


def test_str():
    mapper = ObjectMapper(Tail)
    assert str(mapper) == (
        "ObjectMapper(Tail, TokenParser(positional=1, options=0, var_args=True))"
    )
