"""Column locators for the GameChanger season export header.

The export concatenates a batting, a pitching and a fielding section in one
row. Labels are not prefixed per section, so ``H``, ``SO``, ``R``, ``BB`` and
friends occur several times. Sections are told apart by anchor labels:

* fielding starts at the ``TC`` that opens the ``TC A PO FPCT E DP`` run,
* pitching starts at the first ``IP`` and ends where fielding starts,
* everything between the identity columns and ``IP`` is batting.
"""

from dataclasses import dataclass, field

# Number, Last, First
IDENTITY_COLUMNS = 3

BATTING_LABELS: dict[str, str] = {
    'gp': 'GP',
    'pa': 'PA',
    'ab': 'AB',
    'avg': 'AVG',
    'obp': 'OBP',
    'slg': 'SLG',
    'ops': 'OPS',
    'h': 'H',
    'singles': '1B',
    'doubles': '2B',
    'triples': '3B',
    'hr': 'HR',
    'rbi': 'RBI',
    'r': 'R',
    'bb': 'BB',
    'so': 'SO',
    'hbp': 'HBP',
    'sb': 'SB',
    'cs': 'CS',
}

FIELDING_SEQUENCE: tuple[tuple[str, str], ...] = (
    ('tc', 'TC'),
    ('a', 'A'),
    ('po', 'PO'),
    ('fpct', 'FPCT'),
    ('e', 'E'),
    ('dp', 'DP'),
)

PITCHING_RATE_SEQUENCE: tuple[tuple[str, str], ...] = (
    ('era', 'ERA'),
    ('whip', 'WHIP'),
)

PITCHING_COUNT_LABELS: tuple[tuple[str, str], ...] = (
    ('so', 'SO'),
    ('bb', 'BB'),
    ('h', 'H'),
    ('r', 'R'),
)


@dataclass(frozen=True)
class ColumnLayout:
    """Column indices per stat section, keyed by stat field name."""

    batting: dict[str, int] = field(default_factory=dict)
    pitching: dict[str, int] = field(default_factory=dict)
    fielding: dict[str, int] = field(default_factory=dict)
    pitching_start: int | None = None
    fielding_start: int | None = None


def _find(header: list[str], label: str, start: int, stop: int | None = None) -> int | None:
    """Return the first index of ``label`` in ``header[start:stop]``."""
    stop = len(header) if stop is None else min(stop, len(header))
    for index in range(max(start, 0), stop):
        if header[index] == label:
            return index
    return None


def _locate_sequence(
    header: list[str],
    sequence: tuple[tuple[str, str], ...],
    start: int,
    stop: int | None = None,
) -> dict[str, int]:
    """Locate labels in the given order, each one searched after the previous.

    The search stops at the first label that cannot be found; later labels
    of the sequence are not looked up.
    """
    columns: dict[str, int] = {}
    position = start
    for key, label in sequence:
        index = _find(header, label, position, stop)
        if index is None:
            break
        columns[key] = index
        position = index + 1
    return columns


def locate_fielding_columns(header: list[str]) -> dict[str, int]:
    """Locate the fielding sextet ``TC, A, PO, FPCT, E, DP``.

    ``TC`` candidates are tried from the end of the header backwards. The
    first candidate followed by the complete sextet wins; otherwise the
    candidate with the longest partial run is returned.

    Args:
        header: Header row of the export.

    Returns:
        Mapping of fielding field name to column index. Labels that could
        not be located are missing from the mapping.
    """
    best: dict[str, int] = {}
    for index in range(len(header) - 1, IDENTITY_COLUMNS - 1, -1):
        if header[index] != 'TC':
            continue
        columns = _locate_sequence(header, FIELDING_SEQUENCE, index)
        if len(columns) == len(FIELDING_SEQUENCE):
            return columns
        if len(columns) > len(best):
            best = columns
    return best


def locate_pitching_columns(
    header: list[str],
    start: int = IDENTITY_COLUMNS,
    stop: int | None = None,
) -> dict[str, int]:
    """Locate the pitching columns between ``start`` and ``stop``.

    ``IP`` anchors the section. ``ERA`` is searched after ``IP`` and ``WHIP``
    after ``ERA``; ``SO``, ``BB``, ``H`` and ``R`` are the first occurrences
    after ``IP``; ``ER`` is searched after ``R``.

    Args:
        header: Header row of the export.
        start: First column of the search window.
        stop: End of the search window (exclusive), usually the fielding start.

    Returns:
        Mapping of pitching field name to column index; empty if the header
        has no ``IP`` column in the window.
    """
    ip_index = _find(header, 'IP', start, stop)
    if ip_index is None:
        return {}

    columns = {'ip': ip_index}
    columns.update(_locate_sequence(header, PITCHING_RATE_SEQUENCE, ip_index + 1, stop))
    for key, label in PITCHING_COUNT_LABELS:
        index = _find(header, label, ip_index + 1, stop)
        if index is not None:
            columns[key] = index
    if 'r' in columns:
        er_index = _find(header, 'ER', columns['r'] + 1, stop)
        if er_index is not None:
            columns['er'] = er_index
    return columns


def locate_batting_columns(header: list[str], stop: int | None = None) -> dict[str, int]:
    """Locate batting columns as the first occurrence of each label before ``stop``."""
    columns: dict[str, int] = {}
    for key, label in BATTING_LABELS.items():
        index = _find(header, label, IDENTITY_COLUMNS, stop)
        if index is not None:
            columns[key] = index
    return columns


def build_column_index(header: list[str]) -> ColumnLayout:
    """Split the header into its batting, pitching and fielding sections.

    Args:
        header: Header row of the export (starting with Number, Last, First).

    Returns:
        ColumnLayout with one index map per section.
    """
    fielding = locate_fielding_columns(header)
    fielding_start = fielding.get('tc')

    pitching = locate_pitching_columns(header, IDENTITY_COLUMNS, fielding_start)
    pitching_start = pitching.get('ip')

    batting_stop = pitching_start if pitching_start is not None else fielding_start
    batting = locate_batting_columns(header, batting_stop)

    return ColumnLayout(
        batting=batting,
        pitching=pitching,
        fielding=fielding,
        pitching_start=pitching_start,
        fielding_start=fielding_start,
    )
