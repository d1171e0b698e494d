"""Payload builders handed to the storage layer after the preview was confirmed."""

import json
import logging
from dataclasses import asdict
from pathlib import Path

from gcstats import MatchResult, ParsedPlayerStats

log = logging.getLogger(__name__)


def build_stats_import(results: list[MatchResult]) -> list[dict]:
    """Build stat upsert records for all matched rows.

    Unmatched rows are left out; fetch them with unmatched_players().

    Args:
        results: Match results from match_players().

    Returns:
        One dict per matched row with player_id, batting, fielding and
        pitching (None for players who did not pitch).
    """
    records = []
    for r in results:
        if not r.is_matched:
            continue
        records.append({
            'player_id': r.player_id,
            'batting': asdict(r.parsed.batting),
            'fielding': asdict(r.parsed.fielding),
            'pitching': asdict(r.parsed.pitching) if r.parsed.pitching else None,
        })
    return records


def unmatched_players(results: list[MatchResult]) -> list[ParsedPlayerStats]:
    """Return the parsed rows that still need manual resolution."""
    return [r.parsed for r in results if not r.is_matched]


def build_roster_records(parsed_players: list[ParsedPlayerStats]) -> list[dict]:
    """Build new-player records for creating a roster from an export."""
    return [
        {'name': p.full_name, 'jersey_number': p.jersey_number}
        for p in parsed_players
    ]


def write_json(payload: list[dict], output_path: Path) -> None:
    """Write an import payload as UTF-8 JSON.

    Args:
        payload: Records from build_stats_import() or build_roster_records().
        output_path: Path for the output JSON file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    log.info("Import-Datei geschrieben: %s (%d Eintraege)", output_path, len(payload))
