"""BDD step definitions for filtering, rendering and filter option features."""

import shlex
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from lwesfilter import cli
from lwesfilter.core.filters import passes
from lwesfilter.core.models import (
    AttributeValue,
    Boolean,
    Event,
    Int16,
    Int32,
    Int64,
    IPv4Address,
    String,
    UInt16,
    UInt32,
    UInt64,
)
from lwesfilter.core.rendering import render

# Attribute type names used in feature tables
_TYPES = {
    "uint16": lambda text: UInt16(int(text)),
    "int16": lambda text: Int16(int(text)),
    "uint32": lambda text: UInt32(int(text)),
    "int32": lambda text: Int32(int(text)),
    "uint64": lambda text: UInt64(int(text)),
    "int64": lambda text: Int64(int(text)),
    "bool": lambda text: Boolean(text == "true"),
    "ip": IPv4Address,
    "string": String,
}


@dataclass
class FilterScenarioContext:
    """Shared state between steps in a filtering scenario."""

    event: Event | None = None
    config: cli.ListenerConfig = field(default_factory=cli.ListenerConfig)
    passed: bool | None = None
    output: str = ""
    exit_status: int | None = None
    stderr: str = ""


@pytest.fixture
def ctx() -> FilterScenarioContext:
    """Fresh scenario context for each test."""
    return FilterScenarioContext()


def _attributes(datatable: list[list[str]]) -> dict[str, AttributeValue]:
    return {name: _TYPES[kind](value) for name, kind, value in datatable[1:]}


# === Given ===
@given(parsers.parse('an event "{name}" with attributes:'))
def step_event_with_attributes(
    ctx: FilterScenarioContext, name: str, datatable: list[list[str]]
) -> None:
    ctx.event = Event(name=name, attributes=_attributes(datatable))


@given(parsers.parse('an event "{name}" with no attributes'))
def step_event_without_attributes(ctx: FilterScenarioContext, name: str) -> None:
    ctx.event = Event(name=name)


@given("no filters")
def step_no_filters(ctx: FilterScenarioContext) -> None:
    ctx.config = cli.ListenerConfig()


@given(parsers.parse('the command line "{argv}"'))
def step_command_line(ctx: FilterScenarioContext, argv: str) -> None:
    args = cli.build_parser().parse_args(shlex.split(argv))
    ctx.config = cli.build_config(args)


# === When ===
@when("the event is filtered")
def step_filter(ctx: FilterScenarioContext) -> None:
    assert ctx.event is not None
    ctx.passed = passes(ctx.event, ctx.config.name_filter, ctx.config.attr_filter)


@when("the event is rendered")
def step_render(ctx: FilterScenarioContext) -> None:
    assert ctx.event is not None
    ctx.output = render(ctx.event)


@when(parsers.parse('the program is started with "{argv}"'))
def step_start_program(
    ctx: FilterScenarioContext, argv: str, capsys: pytest.CaptureFixture[str]
) -> None:
    ctx.exit_status = cli.main(shlex.split(argv))
    ctx.stderr = capsys.readouterr().err


# === Then ===
@then("the event passes")
def step_passes(ctx: FilterScenarioContext) -> None:
    assert ctx.passed is True


@then("the event is dropped")
def step_dropped(ctx: FilterScenarioContext) -> None:
    assert ctx.passed is False


@then(parsers.parse('the output is "{line}"'))
def step_output_is(ctx: FilterScenarioContext, line: str) -> None:
    assert ctx.output == line + "\n"


@then("the output ends with one newline")
def step_output_newline(ctx: FilterScenarioContext) -> None:
    assert ctx.output.endswith("\n")
    assert not ctx.output.endswith("\n\n")


@then("the attribute constraint is:")
def step_attribute_constraint(
    ctx: FilterScenarioContext, datatable: list[list[str]]
) -> None:
    assert ctx.config.attr_filter is not None
    expected = tuple((key, value) for key, value in datatable[1:])
    assert ctx.config.attr_filter.pairs == expected


@then(parsers.parse("it exits with status {status:d}"))
def step_exit_status(ctx: FilterScenarioContext, status: int) -> None:
    assert ctx.exit_status == status


@then(parsers.parse('stderr mentions "{text}"'))
def step_stderr_mentions(ctx: FilterScenarioContext, text: str) -> None:
    assert text in ctx.stderr
