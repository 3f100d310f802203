from dataclasses import dataclass, field, fields

import pytest

from argbind.adapters import IdentityAdapter
from argbind.classifier import classify, describe, read_tags
from argbind.descriptors import Role
from argbind.exceptions import StructuralError
from argbind.tags import Option, Positional, VariadicTail, argument, option, tags, var_args


@dataclass
class Tagged:
    name: str = argument(0)
    verbose: bool = option("v")
    rest: list[str] = var_args(IdentityAdapter)
    plain: int = 0


@dataclass
class ArgAndOption:
    both: str = field(default="", metadata=tags(Positional(0), Option("f")))


@dataclass
class OptionAndTail:
    both: list[str] = field(
        default_factory=list,
        metadata=tags(Option("f"), VariadicTail(IdentityAdapter)),
    )


def field_of(target_type, name):
    return next(f for f in fields(target_type) if f.name == name)


@pytest.mark.parametrize(
    "name, role",
    [
        ("name", Role.POSITIONAL),
        ("verbose", Role.OPTION),
        ("rest", Role.VARIADIC_TAIL),
        ("plain", Role.UNANNOTATED),
    ],
)
def test_classify_roles(name, role):
    assert classify(field_of(Tagged, name), Tagged) is role


def test_read_tags():
    found = read_tags(field_of(Tagged, "name"))
    assert found == {Role.POSITIONAL: Positional(0)}
    assert read_tags(field_of(Tagged, "plain")) == {}


def test_positional_and_option_is_structural_error():
    with pytest.raises(StructuralError) as excinfo:
        classify(field_of(ArgAndOption, "both"), ArgAndOption)
    message = str(excinfo.value)
    assert "'both'" in message
    assert "ArgAndOption" in message
    assert "positional" in message
    assert "option" in message


def test_option_and_variadic_tail_is_structural_error():
    with pytest.raises(StructuralError) as excinfo:
        classify(field_of(OptionAndTail, "both"), OptionAndTail)
    assert "variadic_tail" in str(excinfo.value)


def test_describe_builds_descriptor():
    descriptor = describe(field_of(Tagged, "verbose"), bool, Tagged)
    assert descriptor.name == "verbose"
    assert descriptor.role is Role.OPTION
    assert descriptor.key == "v"
    assert descriptor.declared_type is bool
    assert str(descriptor) == "Tagged.verbose"


def test_tags_rejects_non_tags():
    with pytest.raises(TypeError):
        tags("positional")
