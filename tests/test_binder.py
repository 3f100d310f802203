from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from functools import partial

import pytest

from argbind.adapters import DateAdapter, EnumAdapter, IdentityAdapter, SplitAdapter
from argbind.binder import bind, convert_token, create_target
from argbind.builder import build_specification
from argbind.descriptors import ArgumentSpecification, FieldDescriptor, Role
from argbind.exceptions import (
    InvalidTargetTypeError,
    StructuralError,
    ValueAssignmentError,
)
from argbind.parser import ArgumentModel
from argbind.primitives import Char, Float32, Int8
from argbind.tags import Option, Positional, VariadicTail, argument, option, var_args


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Model:
    arg0: str = argument(0)
    arg1: int = argument(1, mandatory=False, default=-1)
    arg2: Float32 = argument(2, mandatory=False, default=-1.0)
    flag: bool = option("f", "flag")
    bar: int = option("b", expects_value=True, default=-1)


@dataclass
class WithAdapters:
    day: date = argument(0, adapter=partial(DateAdapter, "%Y%m%d"))
    words: list[str] = option("w", "words", expects_value=True, adapter=SplitAdapter)
    color: Color = option("c", expects_value=True, adapter=partial(EnumAdapter, Color), default=Color.RED)


@dataclass
class WithTail:
    first: str = argument(0)
    rest: list[str] = var_args(IdentityAdapter)


@dataclass
class IntTail:
    numbers: set[int] = var_args(converter=int)


@dataclass
class Scalars:
    small: Int8 = option("s", expects_value=True)
    letter: Char = option("l", expects_value=True)
    yes: bool = option("y", expects_value=True)


@dataclass
class WrongAdapterResult:
    day: date = argument(0, converter=str)


@dataclass(frozen=True)
class Frozen:
    name: str = argument(0)


@dataclass
class Counter:
    calls = []
    value: str = argument(0, converter=lambda text: Counter.calls.append(text) or text)


@dataclass
class RequiresPlain:
    name: str = argument(0)
    note: str


def bound(target_type, **model_fields):
    spec = build_specification(target_type)
    target = create_target(spec)
    return bind(spec, ArgumentModel(**model_fields), target)


def test_create_target_fills_zero_values():
    target = create_target(build_specification(Model))
    assert target.arg0 == ""
    assert target.arg1 == -1
    assert target.arg2 == -1.0
    assert target.flag is False
    assert target.bar == -1


def test_create_target_without_defaults():
    target = create_target(build_specification(Scalars))
    assert target.small == 0
    assert target.letter == " "
    assert target.yes is False
    target = create_target(build_specification(WithAdapters))
    assert target.day is None
    assert target.words is None


def test_create_target_for_unannotated_required_field():
    target = create_target(build_specification(RequiresPlain))
    assert target.note == ""


def test_bind_positional_and_options():
    result = bound(
        Model,
        arguments={"arg0": "foo", "arg1": "8", "arg2": "2.5"},
        options={"f": None, "b": "1024"},
    )
    assert result.arg0 == "foo"
    assert result.arg1 == 8
    assert result.arg2 == 2.5
    assert result.flag is True
    assert result.bar == 1024


def test_absent_values_keep_defaults():
    result = bound(Model, arguments={"arg0": "foo"})
    assert result.arg1 == -1
    assert result.arg2 == -1.0
    assert result.flag is False
    assert result.bar == -1


def test_switch_equals_presence():
    assert bound(Model, arguments={"arg0": "x"}, options={"f": None}).flag is True
    assert bound(Model, arguments={"arg0": "x"}, options={}).flag is False


def test_bind_returns_same_instance():
    spec = build_specification(Model)
    target = create_target(spec)
    assert bind(spec, ArgumentModel(arguments={"arg0": "x"}), target) is target


def test_bind_with_adapters():
    result = bound(
        WithAdapters,
        arguments={"day": "20181109"},
        options={"w": "alpha beta", "c": "GREEN"},
    )
    assert result.day == date(2018, 11, 9)
    assert result.words == ["alpha", "beta"]
    assert result.color is Color.GREEN


def test_adapter_value_equals_adapter_parse():
    adapter = SplitAdapter()
    result = bound(WithAdapters, arguments={"day": "20000101"}, options={"w": "a b c"})
    assert result.words == adapter.parse("a b c")
    assert result.color is Color.RED


def test_adapter_failure_is_value_error():
    with pytest.raises(ValueAssignmentError) as excinfo:
        bound(WithAdapters, arguments={"day": "yesterday"})
    error = excinfo.value
    assert error.field_name == "day"
    assert error.token == "yesterday"
    assert error.target_type is date
    assert "'day'" in str(error)
    assert isinstance(error.__cause__, ValueError)


def test_primitive_conversion_failure_is_value_error():
    with pytest.raises(ValueAssignmentError) as excinfo:
        bound(Model, arguments={"arg0": "x", "arg1": "eight"})
    assert excinfo.value.field_name == "arg1"
    assert excinfo.value.token == "eight"
    assert "int64" in str(excinfo.value)


@pytest.mark.parametrize(
    "options",
    [{"s": "200"}, {"l": "ab"}, {"y": "perhaps"}],
)
def test_scalar_kind_errors(options):
    with pytest.raises(ValueAssignmentError):
        bound(Scalars, options=options)


def test_scalar_kinds():
    result = bound(Scalars, options={"s": "-128", "l": "z", "y": "yes"})
    assert result.small == -128
    assert result.letter == "z"
    assert result.yes is True


def test_wrong_adapter_result_type():
    with pytest.raises(ValueAssignmentError) as excinfo:
        bound(WrongAdapterResult, arguments={"day": "20181109"})
    assert "expected date" in str(excinfo.value)


def test_frozen_target_is_rejected_before_binding():
    with pytest.raises(StructuralError) as excinfo:
        bound(Frozen)
    assert "frozen" in str(excinfo.value)


def test_bind_reports_frozen_instance_as_structural():
    descriptor = FieldDescriptor(
        name="name",
        declared_type=str,
        role=Role.POSITIONAL,
        tag=Positional(0),
        owner=Frozen,
    )
    spec = ArgumentSpecification(target_type=Frozen, positional=(descriptor,))
    with pytest.raises(StructuralError):
        bind(spec, ArgumentModel(arguments={"name": "x"}), Frozen(name=""))


def test_variadic_tail_in_order():
    result = bound(WithTail, arguments={"first": "x"}, plain_arguments=["a", "b", "c"])
    assert result.rest == ["a", "b", "c"]


def test_variadic_tail_empty():
    result = bound(WithTail, arguments={"first": "x"})
    assert result.rest == []


def test_variadic_tail_set_container_and_converter():
    result = bound(IntTail, plain_arguments=["1", "2", "2"])
    assert result.numbers == {1, 2}


def test_variadic_tail_conversion_failure():
    with pytest.raises(ValueAssignmentError) as excinfo:
        bound(IntTail, plain_arguments=["1", "two"])
    assert excinfo.value.token == "two"


def test_converter_runs_once_per_bind():
    Counter.calls.clear()
    bound(Counter, arguments={"value": "one"})
    bound(Counter, arguments={"value": "two"})
    assert Counter.calls == ["one", "two"]


def test_convert_token_unsupported_type_without_adapter():
    descriptor = FieldDescriptor(
        name="day",
        declared_type=date,
        role=Role.OPTION,
        tag=Option("d", expects_value=True),
        owner=Model,
    )
    with pytest.raises(StructuralError):
        convert_token(descriptor, "20181109")


def test_bind_checks_switch_type():
    descriptor = FieldDescriptor(
        name="bar", declared_type=int, role=Role.OPTION, tag=Option("b"), owner=Model
    )
    spec = ArgumentSpecification(target_type=Model, options=(descriptor,))
    with pytest.raises(StructuralError):
        bind(spec, ArgumentModel(options={"b": None}), create_target(spec))


def test_bind_checks_variadic_adapter():
    descriptor = FieldDescriptor(
        name="rest",
        declared_type=list[str],
        role=Role.VARIADIC_TAIL,
        tag=VariadicTail(),
        owner=WithTail,
    )
    spec = ArgumentSpecification(target_type=WithTail, var_args=descriptor)
    with pytest.raises(StructuralError):
        bind(spec, ArgumentModel(plain_arguments=["a"]), WithTail(first="x"))


def test_failing_adapter_factory():
    def broken_factory():
        raise RuntimeError("no adapter today")

    descriptor = FieldDescriptor(
        name="arg0",
        declared_type=str,
        role=Role.OPTION,
        tag=Option("a", expects_value=True, adapter=broken_factory),
        owner=Model,
    )
    with pytest.raises(InvalidTargetTypeError):
        convert_token(descriptor, "x")


def test_factory_must_produce_adapter():
    descriptor = FieldDescriptor(
        name="arg0",
        declared_type=str,
        role=Role.OPTION,
        tag=Option("a", expects_value=True, adapter=object),
        owner=Model,
    )
    with pytest.raises(StructuralError):
        convert_token(descriptor, "x")


def test_binding_does_not_change_specification():
    spec = build_specification(Model)
    snapshot = (spec.positional, spec.options, spec.var_args)
    bind(spec, ArgumentModel(arguments={"arg0": "a"}), create_target(spec))
    bind(spec, ArgumentModel(arguments={"arg0": "b"}), create_target(spec))
    assert (spec.positional, spec.options, spec.var_args) == snapshot


@dataclass
class RoundTrip:
    small: Int8 = option("a", expects_value=True)
    big: int = option("b", expects_value=True)
    ratio: float = option("c", expects_value=True)
    single: Float32 = option("d", expects_value=True)
    letter: Char = option("e", expects_value=True)
    truth: bool = option("g", expects_value=True)
    text: str = option("t", expects_value=True)


@pytest.mark.parametrize(
    "values",
    [
        dict(small=-7, big=2**62, ratio=0.1, single=1.5, letter="q", truth=True, text="hi"),
        dict(small=127, big=-3, ratio=-2.75e10, single=-0.25, letter=" ", truth=False, text=""),
    ],
)
def test_round_trip_canonical_text(values):
    keys = dict(small="a", big="b", ratio="c", single="d", letter="e", truth="g", text="t")
    options = {keys[name]: str(value) for name, value in values.items()}
    result = bound(RoundTrip, options=options)
    for name, value in values.items():
        assert getattr(result, name) == value
