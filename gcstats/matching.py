"""Roster matching for parsed GameChanger rows."""

import logging
from collections import defaultdict

from gcstats import (
    MATCHED_BY_JERSEY,
    MATCHED_BY_NAME,
    MatchResult,
    ParsedPlayerStats,
    RosterPlayer,
)
from gcstats.scoring import (
    DEFAULT_NAME_THRESHOLD,
    calculate_confidence,
    detect_issues,
    name_similarity,
)

log = logging.getLogger(__name__)


def _build_jersey_index(roster: list[RosterPlayer]) -> dict[int, list[RosterPlayer]]:
    """Build a hash index on jersey number, keeping roster order per number."""
    index: dict[int, list[RosterPlayer]] = defaultdict(list)
    for p in roster:
        if p.jersey_number is not None:
            index[p.jersey_number].append(p)
    return dict(index)


def names_match(parsed: ParsedPlayerStats, roster_player: RosterPlayer) -> bool:
    """Loose, case-insensitive name comparison.

    True if the roster name equals "first last", contains the last name, or
    is itself contained in "first last". Best-effort only: short roster
    names and common last names produce false positives, which is why name
    matches are surfaced for review.
    """
    full_name = f'{parsed.first_name} {parsed.last_name}'.lower()
    roster_name = roster_player.name.lower()
    return (
        roster_name == full_name
        or parsed.last_name.lower() in roster_name
        or roster_name in full_name
    )


def _find_by_name(parsed: ParsedPlayerStats, roster: list[RosterPlayer]) -> RosterPlayer | None:
    for p in roster:
        if names_match(parsed, p):
            return p
    return None


def _matched(
    parsed: ParsedPlayerStats,
    roster_player: RosterPlayer,
    matched_by: str,
    name_threshold: float,
    extra_issues: list[str] | None = None,
) -> MatchResult:
    name_sim = name_similarity(parsed, roster_player)
    issues = detect_issues(parsed, roster_player, matched_by, name_sim, name_threshold)
    return MatchResult(
        parsed=parsed,
        player_id=roster_player.id,
        player_name=roster_player.name,
        matched_by=matched_by,
        confidence=calculate_confidence(parsed, roster_player, name_sim),
        issues=tuple(issues + (extra_issues or [])),
    )


def match_players(
    parsed_players: list[ParsedPlayerStats],
    roster: list[RosterPlayer],
    name_threshold: float = DEFAULT_NAME_THRESHOLD,
) -> list[MatchResult]:
    """Match parsed export rows against the team roster.

    Uses a multi-stage approach per row:
    1. Jersey number (hash lookup, first roster player wins)
    2. Loose name match (first roster player wins)
    3. Unmatched → matched_by None

    The threshold only affects the review issues attached to a result,
    never the verdict itself.

    Args:
        parsed_players: Rows from the GameChanger export.
        roster: Current roster players; not modified.
        name_threshold: Name similarity below which jersey matches get flagged.

    Returns:
        One MatchResult per parsed row, in input order.
    """
    jersey_index = _build_jersey_index(roster)

    results: list[MatchResult] = []

    for parsed in parsed_players:
        # Stage 1: Jersey number
        candidates = jersey_index.get(parsed.jersey_number)
        if candidates:
            extra = ['DUPLICATE_JERSEY'] if len(candidates) > 1 else []
            results.append(_matched(parsed, candidates[0], MATCHED_BY_JERSEY, name_threshold, extra))
            continue

        # Stage 2: Name
        by_name = _find_by_name(parsed, roster)
        if by_name is not None:
            results.append(_matched(parsed, by_name, MATCHED_BY_NAME, name_threshold))
            continue

        # Stage 3: No match
        results.append(MatchResult(
            parsed=parsed,
            player_id=None,
            player_name=None,
            matched_by=None,
            confidence=0.0,
            issues=('NO_MATCH',),
        ))

    matched = sum(1 for r in results if r.is_matched)
    log.info(
        "Matching abgeschlossen: %d Spieler verarbeitet, %d zugeordnet, %d offen",
        len(results), matched, len(results) - matched,
    )
    return results
