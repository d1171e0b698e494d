"""Tests for gcstats.scoring module."""

from gcstats import ParsedBattingStats, ParsedFieldingStats, ParsedPlayerStats, RosterPlayer
from gcstats.scoring import (
    WEIGHTS,
    calculate_confidence,
    detect_issues,
    is_exact_name,
    name_similarity,
    normalize_for_tolerant_comparison,
)


def _parsed(**kwargs) -> ParsedPlayerStats:
    """Create a ParsedPlayerStats with defaults for easy test construction."""
    defaults = dict(
        jersey_number=4, last_name='Chen', first_name='Ryan',
        batting=ParsedBattingStats(), fielding=ParsedFieldingStats(),
    )
    defaults.update(kwargs)
    return ParsedPlayerStats(**defaults)


def _roster(**kwargs) -> RosterPlayer:
    defaults = dict(id='p1', name='Ryan Chen', jersey_number=4)
    defaults.update(kwargs)
    return RosterPlayer(**defaults)


class TestWeights:
    """Verify weight configuration."""

    def test_weights_sum_to_one(self):
        assert abs(sum(WEIGHTS.values()) - 1.0) < 1e-9


class TestNormalizeForTolerantComparison:
    """Tests for accent/punctuation-tolerant normalization."""

    def test_accent_removal(self):
        assert normalize_for_tolerant_comparison('José') == 'JOSE'
        assert normalize_for_tolerant_comparison('Muñoz') == 'MUNOZ'

    def test_punctuation_removal(self):
        assert normalize_for_tolerant_comparison("O'Neil") == 'ONEIL'
        assert normalize_for_tolerant_comparison('Smith-Jones') == 'SMITHJONES'
        assert normalize_for_tolerant_comparison('J.T. Ruiz') == 'JTRUIZ'

    def test_whitespace_removal(self):
        assert normalize_for_tolerant_comparison('  Ryan  Chen ') == 'RYANCHEN'


class TestNameSimilarity:
    """Tests for name similarity."""

    def test_identical(self):
        assert name_similarity(_parsed(), _roster()) == 1.0

    def test_case_and_accents_ignored(self):
        p = _parsed(first_name='José', last_name='Muñoz')
        assert name_similarity(p, _roster(name='jose munoz')) == 1.0

    def test_last_first_order(self):
        assert name_similarity(_parsed(), _roster(name='Chen Ryan')) == 1.0

    def test_unrelated_names_low(self):
        assert name_similarity(_parsed(), _roster(name='Billy Xu')) < 0.7

    def test_empty_roster_name(self):
        assert name_similarity(_parsed(), _roster(name='')) == 0.0


class TestIsExactName:
    """Tests for exact name comparison."""

    def test_exact(self):
        assert is_exact_name(_parsed(), _roster(name='RYAN CHEN'))

    def test_partial(self):
        assert not is_exact_name(_parsed(), _roster(name='R. Chen'))


class TestCalculateConfidence:
    """Tests for confidence score calculation."""

    def test_perfect_match(self):
        assert calculate_confidence(_parsed(), _roster(), 1.0) == 1.0

    def test_name_only(self):
        score = calculate_confidence(_parsed(), _roster(jersey_number=None), 1.0)
        assert score == WEIGHTS['name']

    def test_jersey_only(self):
        score = calculate_confidence(_parsed(), _roster(), 0.0)
        assert score == WEIGHTS['jersey_number']

    def test_partial_similarity(self):
        score = calculate_confidence(_parsed(), _roster(), 0.9)
        assert score == round(WEIGHTS['jersey_number'] + WEIGHTS['name'] * 0.9, 4)


class TestDetectIssues:
    """Tests for review issue detection."""

    def test_no_issues_on_clean_jersey_match(self):
        assert detect_issues(_parsed(), _roster(), 'jersey_number', 1.0) == []

    def test_name_mismatch_on_jersey_match(self):
        issues = detect_issues(_parsed(), _roster(name='Billy Xu'), 'jersey_number', 0.5)
        assert issues == ['NAME_MISMATCH']

    def test_threshold_respected(self):
        assert detect_issues(_parsed(), _roster(), 'jersey_number', 0.8, name_threshold=0.75) == []

    def test_exact_name_match_without_jersey(self):
        issues = detect_issues(_parsed(), _roster(jersey_number=None), 'name', 1.0)
        assert issues == []

    def test_partial_name_and_jersey_mismatch(self):
        r = _roster(name='Chen', jersey_number=11)
        issues = detect_issues(_parsed(), r, 'name', 0.8)
        assert 'PARTIAL_NAME' in issues
        assert 'JERSEY_MISMATCH' in issues
        assert 'NAME_MISMATCH' not in issues
