"""Tests for CLI date range helpers."""

from datetime import date

import click
import pytest
from click.testing import CliRunner

from billtrack.cli.date_filters import period_options, resolve_cli_date_range
from billtrack.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"period_flags": {"this-month": True, "last-month": True}}, "Only one period option"),
        ({"period_flags": {"this-month": True}, "start_date": "2024-01-01"}, "cannot be combined"),
        ({"period_flags": {}, "start_date": "not-a-date"}, "Invalid start date"),
        ({"period_flags": {}, "end_date": "not-a-date"}, "Invalid end date"),
    ],
)
def test_rejected_combinations_exit(capsys, kwargs, message):
    kwargs = {"start_date": None, "end_date": None, **kwargs}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), **kwargs)

    assert excinfo.value.exit_code == 1
    assert message in capsys.readouterr().err


def test_period_flag_resolves_range():
    start, end = resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={"last-year": True, "this-month": False}
    )
    assert (start, end) == get_date_range("last-year")


def test_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(), start_date="2024-01-02", end_date="05/01/2024", period_flags={}
    )
    assert (start, end) == (date(2024, 1, 2), date(2024, 1, 5))


def test_default_range_only_without_dates():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}, default_range=default_range
    ) == default_range
    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}
    ) == (None, None)


def test_period_options_adds_flags():
    @click.command()
    @period_options
    def command(**flags):
        click.echo(",".join(sorted(name for name, is_set in flags.items() if is_set)))

    result = CliRunner().invoke(command, ["--last-week"])

    assert result.exit_code == 0
    assert result.output.strip() == "last_week"
