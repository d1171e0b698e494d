"""Shared test fixtures."""

import pytest

from export_builder import build_export, scenario_rows
from gcstats import RosterPlayer
from gcstats.reader import parse_export


@pytest.fixture
def export_text() -> str:
    """Season export with a title row, three players, totals and glossary."""
    return build_export(scenario_rows())


@pytest.fixture
def parsed_players(export_text):
    """The three players parsed from export_text."""
    return parse_export(export_text)


@pytest.fixture
def roster():
    """Roster containing only Ryan Chen."""
    return [RosterPlayer(id='p1', name='Ryan Chen', jersey_number=4)]
