"""Confidence scoring and review issues for roster matches."""

import unicodedata

from rapidfuzz.distance import JaroWinkler

from gcstats import MATCHED_BY_JERSEY, MATCHED_BY_NAME, ParsedPlayerStats, RosterPlayer

WEIGHTS: dict[str, float] = {
    'jersey_number': 0.5,
    'name': 0.5,
}

# Name similarity below this flags a jersey match for review
DEFAULT_NAME_THRESHOLD = 0.85


def normalize_for_tolerant_comparison(text: str) -> str:
    """Normalize text for tolerant name comparison.

    Removes accents/diacritics via NFD decomposition, strips spaces,
    hyphens, dots, apostrophes, commas and semicolons, then uppercases.

    Args:
        text: Raw name string.

    Returns:
        Normalized string for comparison.
    """
    decomposed = unicodedata.normalize('NFD', text)
    stripped = ''.join(ch for ch in decomposed if unicodedata.category(ch) != 'Mn')
    for ch in (' ', '-', '.', ',', ';', "'"):
        stripped = stripped.replace(ch, '')
    return stripped.upper()


def name_similarity(parsed: ParsedPlayerStats, roster_player: RosterPlayer) -> float:
    """Jaro-Winkler similarity between the export name and the roster name.

    Both "first last" and "last first" orders are compared and the better
    score is returned, so rosters kept as "Chen Ryan" still score high.

    Returns:
        Similarity between 0.0 and 1.0.
    """
    roster_name = normalize_for_tolerant_comparison(roster_player.name)
    forward = normalize_for_tolerant_comparison(f'{parsed.first_name} {parsed.last_name}')
    swapped = normalize_for_tolerant_comparison(f'{parsed.last_name} {parsed.first_name}')
    if not roster_name or not forward:
        return 0.0
    return max(
        JaroWinkler.similarity(forward, roster_name),
        JaroWinkler.similarity(swapped, roster_name),
    )


def is_exact_name(parsed: ParsedPlayerStats, roster_player: RosterPlayer) -> bool:
    """Check whether the normalized full names are identical."""
    return (
        normalize_for_tolerant_comparison(parsed.full_name)
        == normalize_for_tolerant_comparison(roster_player.name)
    )


def calculate_confidence(
    parsed: ParsedPlayerStats,
    roster_player: RosterPlayer,
    name_sim: float,
) -> float:
    """Calculate the confidence score for a match.

    Args:
        parsed: Player row from the export.
        roster_player: Matched roster player.
        name_sim: Name similarity (0.0–1.0).

    Returns:
        Confidence score between 0.0 and 1.0.
    """
    jersey_agrees = roster_player.jersey_number == parsed.jersey_number
    score = (
        WEIGHTS['jersey_number'] * (1.0 if jersey_agrees else 0.0)
        + WEIGHTS['name'] * name_sim
    )
    return round(score, 4)


def detect_issues(
    parsed: ParsedPlayerStats,
    roster_player: RosterPlayer,
    matched_by: str,
    name_sim: float,
    name_threshold: float = DEFAULT_NAME_THRESHOLD,
) -> list[str]:
    """Detect everything about a match a human should double-check.

    Args:
        parsed: Player row from the export.
        roster_player: Matched roster player.
        matched_by: How the match was found (jersey_number or name).
        name_sim: Name similarity (0.0–1.0).
        name_threshold: Minimum similarity for a jersey match to pass unflagged.

    Returns:
        List of issue codes.
    """
    issues: list[str] = []

    if matched_by == MATCHED_BY_JERSEY and name_sim < name_threshold:
        issues.append('NAME_MISMATCH')

    if matched_by == MATCHED_BY_NAME:
        if not is_exact_name(parsed, roster_player):
            issues.append('PARTIAL_NAME')
        if (roster_player.jersey_number is not None
                and roster_player.jersey_number != parsed.jersey_number):
            issues.append('JERSEY_MISMATCH')

    return issues
