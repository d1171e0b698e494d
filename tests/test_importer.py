"""Tests for gcstats.importer module."""

import json

from gcstats import RosterPlayer
from gcstats.importer import (
    build_roster_records,
    build_stats_import,
    unmatched_players,
    write_json,
)
from gcstats.matching import match_players


class TestBuildStatsImport:
    """Tests for the stat upsert payload."""

    def test_only_matched_rows(self, parsed_players, roster):
        records = build_stats_import(match_players(parsed_players, roster))
        assert len(records) == 1
        assert records[0]['player_id'] == 'p1'
        assert records[0]['batting']['h'] == 10
        assert records[0]['fielding']['tc'] == 30
        assert records[0]['pitching'] is None

    def test_pitching_included_for_pitchers(self, parsed_players):
        roster = [RosterPlayer(id='p2', name='Cole Anderson', jersey_number=7)]
        records = build_stats_import(match_players(parsed_players, roster))
        assert [r['player_id'] for r in records] == ['p2']
        assert records[0]['pitching']['ip'] == 3.1

    def test_nothing_matched(self, parsed_players):
        assert build_stats_import(match_players(parsed_players, [])) == []


class TestUnmatchedPlayers:
    """Tests for the manual-resolution list."""

    def test_unmatched(self, parsed_players, roster):
        pending = unmatched_players(match_players(parsed_players, roster))
        assert [p.last_name for p in pending] == ['Anderson', 'Doe']


class TestBuildRosterRecords:
    """Tests for roster creation records."""

    def test_records(self, parsed_players):
        records = build_roster_records(parsed_players)
        assert records == [
            {'name': 'Ryan Chen', 'jersey_number': 4},
            {'name': 'Cole Anderson', 'jersey_number': 7},
            {'name': 'Jane Doe', 'jersey_number': 99},
        ]


class TestWriteJson:
    """Tests for JSON output."""

    def test_round_trip_file(self, tmp_path, parsed_players, roster):
        out = tmp_path / 'sub' / 'import.json'
        payload = build_stats_import(match_players(parsed_players, roster))
        write_json(payload, out)
        assert json.loads(out.read_text(encoding='utf-8')) == payload
