"""Reader for GameChanger season exports and roster files."""

import csv
import io
import logging
import math
import re
from pathlib import Path

from gcstats import (
    HeaderNotFoundError,
    ParsedBattingStats,
    ParsedFieldingStats,
    ParsedPitchingStats,
    ParsedPlayerStats,
    RosterPlayer,
)
from gcstats.columns import ColumnLayout, build_column_index

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')

HEADER_SIGNATURE = ['Number', 'Last', 'First']
HEADER_SEARCH_ROWS = 5

TOTALS_MARKER = 'Totals'
GLOSSARY_MARKER = 'Glossary'

_EMPTY_VALUES = {'', '-', 'N/A'}

_JERSEY_RE = re.compile(r'([0-9]+)(?:\.0*)?')


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the CSV file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def normalize_whitespace(value: str) -> str:
    """Collapse runs of whitespace into a single space and strip the ends."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def parse_number(value: str | None) -> float:
    """Parse a stat cell, degrading anything unusable to 0.

    Percent signs are dropped without rescaling ("24%" -> 24.0). The
    placeholders "-", "N/A" and the empty string count as 0, as do
    malformed and non-finite values.

    Args:
        value: Raw cell value, or None for a missing cell.

    Returns:
        Parsed value as float.
    """
    if value is None:
        return 0.0
    cleaned = value.replace('%', '').strip()
    if cleaned in _EMPTY_VALUES:
        return 0.0
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_innings(value: str | None) -> float:
    """Parse innings pitched in thirds notation.

    The decimal is kept literally: "6.2" (6 2/3 innings) parses to 6.2.
    """
    if value is None:
        return 0.0
    cleaned = value.strip()
    if cleaned in _EMPTY_VALUES:
        return 0.0
    try:
        innings = float(cleaned)
    except ValueError:
        return 0.0
    return innings if math.isfinite(innings) else 0.0


def parse_jersey_number(value: str) -> int | None:
    """Parse a jersey number; returns None if the cell is not a plain integer.

    Only digits are accepted, optionally followed by a zero fraction ("7.0").
    """
    match = _JERSEY_RE.fullmatch(value)
    if match is None:
        return None
    return int(match.group(1))


def tokenize(text: str) -> list[list[str]]:
    """Split CSV text into whitespace-normalized rows, dropping blank rows."""
    text = text.lstrip('\ufeff')
    rows = []
    for row in csv.reader(io.StringIO(text)):
        cells = [normalize_whitespace(cell) for cell in row]
        if any(cells):
            rows.append(cells)
    return rows


def find_header_row(rows: list[list[str]]) -> int:
    """Find the index of the ``Number,Last,First`` header row.

    Args:
        rows: Tokenized rows of the export.

    Returns:
        Index of the header row within ``rows``.

    Raises:
        HeaderNotFoundError: If none of the first rows carries the signature.
    """
    for index, row in enumerate(rows[:HEADER_SEARCH_ROWS]):
        if row[:len(HEADER_SIGNATURE)] == HEADER_SIGNATURE:
            return index
    raise HeaderNotFoundError(
        "Keine Header-Zeile (Number, Last, First) gefunden. "
        "Die Datei ist kein GameChanger-Export."
    )


def _cell(row: list[str], index: int | None) -> str | None:
    if index is None or index >= len(row):
        return None
    return row[index]


def _parse_row(row: list[str], jersey_number: int, layout: ColumnLayout) -> ParsedPlayerStats:
    """Build a ParsedPlayerStats from one data row."""
    batting = ParsedBattingStats(**{
        key: parse_number(_cell(row, index))
        for key, index in layout.batting.items()
    })
    fielding = ParsedFieldingStats(**{
        key: parse_number(_cell(row, index))
        for key, index in layout.fielding.items()
    })

    pitching = None
    innings = parse_innings(_cell(row, layout.pitching.get('ip')))
    if innings > 0:
        pitching = ParsedPitchingStats(ip=innings, **{
            key: parse_number(_cell(row, index))
            for key, index in layout.pitching.items()
            if key != 'ip'
        })

    return ParsedPlayerStats(
        jersey_number=jersey_number,
        last_name=_cell(row, 1) or '',
        first_name=_cell(row, 2) or '',
        batting=batting,
        fielding=fielding,
        pitching=pitching,
    )


def parse_export(text: str) -> list[ParsedPlayerStats]:
    """Parse the text of a GameChanger season export.

    Data rows follow the header row. A ``Totals`` row is skipped, a
    ``Glossary`` row ends the data section, and rows without an integer
    jersey number are skipped.

    Args:
        text: Raw CSV text.

    Returns:
        Parsed players in export order.

    Raises:
        HeaderNotFoundError: If the text is not a GameChanger export.
    """
    rows = tokenize(text)
    header_index = find_header_row(rows)
    layout = build_column_index(rows[header_index])
    log.debug(
        "Header in Zeile %d, Pitching ab Spalte %s, Fielding ab Spalte %s",
        header_index, layout.pitching_start, layout.fielding_start,
    )

    players: list[ParsedPlayerStats] = []
    for offset, row in enumerate(rows[header_index + 1:], start=header_index + 1):
        marker = row[0]
        if marker == GLOSSARY_MARKER:
            break
        if marker == TOTALS_MARKER:
            continue
        jersey_number = parse_jersey_number(marker)
        if jersey_number is None:
            log.debug("Zeile %d uebersprungen: keine Trikotnummer (%r)", offset, marker)
            continue
        players.append(_parse_row(row, jersey_number, layout))

    log.info("%d Spieler aus GameChanger-Export gelesen", len(players))
    return players


def read_export(path: str | Path) -> list[ParsedPlayerStats]:
    """Read and parse a GameChanger export file.

    Handles UTF-16LE (with BOM) and UTF-8 encoded files automatically.

    Raises:
        FileNotFoundError: If the file does not exist.
        HeaderNotFoundError: If the file is not a GameChanger export or
            cannot be decoded.
    """
    path = Path(path)
    encoding = detect_encoding(path)

    try:
        with open(path, 'r', encoding=encoding, newline='') as f:
            content = f.read()
    except UnicodeDecodeError as exc:
        raise HeaderNotFoundError(
            f"Datei {path} ist nicht als {encoding} lesbar ({exc.reason}). "
            "Die Datei ist kein lesbarer GameChanger-Export."
        ) from exc

    log.info("Lese GameChanger-Export %s", path)
    return parse_export(content)


def read_roster(path: str | Path) -> list[RosterPlayer]:
    """Read roster players from a CSV file.

    Expects the columns ``id``, ``name`` and ``jersey_number``; an empty
    jersey number means the player has none.

    Args:
        path: Path to the roster CSV file.

    Returns:
        List of RosterPlayer objects.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If required columns are missing.
    """
    path = Path(path)
    encoding = detect_encoding(path)

    with open(path, 'r', encoding=encoding, newline='') as f:
        content = f.read()

    reader = csv.DictReader(io.StringIO(content.lstrip('\ufeff')))

    required_cols = {'id', 'name', 'jersey_number'}
    if reader.fieldnames is None:
        raise ValueError(f"Datei {path} ist leer oder hat keine Header-Zeile.")
    actual_cols = {normalize_whitespace(c) for c in reader.fieldnames}
    missing = required_cols - actual_cols
    if missing:
        raise ValueError(
            f"Fehlende Spalten in {path}: {', '.join(sorted(missing))}"
        )

    roster: list[RosterPlayer] = []
    for row_num, row in enumerate(reader, start=2):
        cleaned = {normalize_whitespace(k): normalize_whitespace(v or '')
                   for k, v in row.items() if k is not None}
        try:
            if not cleaned['id']:
                raise ValueError("leere Spieler-ID")
            jersey = cleaned['jersey_number']
            roster.append(RosterPlayer(
                id=cleaned['id'],
                name=cleaned['name'],
                jersey_number=int(jersey) if jersey else None,
            ))
        except (ValueError, KeyError) as exc:
            log.warning("Zeile %d in %s uebersprungen: %s", row_num, path, exc)

    log.info("%d Kaderspieler gelesen aus %s", len(roster), path)
    return roster
