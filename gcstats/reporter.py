"""Preview reports for match results (CSV, HTML, summary)."""

import csv
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from gcstats import MATCHED_BY_JERSEY, MATCHED_BY_NAME, MatchResult

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

CSV_COLUMNS = [
    'Number',
    'Last',
    'First',
    'AVG',
    'OBP',
    'H',
    'RBI',
    'IP',
    'Player_ID',
    'Player_Name',
    'Matched_By',
    'Confidence',
    'Issues',
]


def _result_to_row(result: MatchResult) -> dict:
    """Convert a MatchResult to a flat dict for CSV/HTML output."""
    p = result.parsed
    return {
        'Number': str(p.jersey_number),
        'Last': p.last_name,
        'First': p.first_name,
        'AVG': f'{p.batting.avg:.3f}',
        'OBP': f'{p.batting.obp:.3f}',
        'H': f'{p.batting.h:g}',
        'RBI': f'{p.batting.rbi:g}',
        'IP': f'{p.pitching.ip:g}' if p.pitching else '',
        'Player_ID': result.player_id or '',
        'Player_Name': result.player_name or '',
        'Matched_By': result.matched_by or '',
        'Confidence': f'{result.confidence:.4f}',
        'Issues': ', '.join(result.issues),
        # Set of issue codes for row highlighting in HTML
        '_issues': set(result.issues),
    }


def write_csv_report(results: list[MatchResult], output_path: Path) -> None:
    """Write match results as a CSV preview.

    Uses UTF-8 with BOM (utf-8-sig) and semicolon delimiter for
    compatibility with Excel.

    Args:
        results: List of match results.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(
            f, fieldnames=CSV_COLUMNS, delimiter=';', extrasaction='ignore',
        )
        writer.writeheader()
        for result in results:
            writer.writerow(_result_to_row(result))

    log.info("CSV-Report geschrieben: %s (%d Zeilen)", output_path, len(results))


def write_html_report(
    results: list[MatchResult],
    output_path: Path,
    title: str = '',
) -> None:
    """Write match results as an HTML preview using Jinja2.

    Args:
        results: List of match results.
        output_path: Path for the output HTML file.
        title: Name of the export file (for the report title).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    rows = [_result_to_row(r) for r in results]
    stats = compute_stats(results)

    html = template.render(
        title=title,
        rows=rows,
        stats=stats,
        columns=CSV_COLUMNS,
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML-Report geschrieben: %s", output_path)


def compute_stats(results: list[MatchResult]) -> dict:
    """Compute summary statistics from match results."""
    all_issues = []
    for r in results:
        all_issues.extend(r.issues)

    return {
        'total': len(results),
        'matched': sum(1 for r in results if r.is_matched),
        'by_jersey': sum(1 for r in results if r.matched_by == MATCHED_BY_JERSEY),
        'by_name': sum(1 for r in results if r.matched_by == MATCHED_BY_NAME),
        'unmatched': sum(1 for r in results if not r.is_matched),
        'pitchers': sum(1 for r in results if r.parsed.pitching is not None),
        'name_mismatch': all_issues.count('NAME_MISMATCH'),
        'duplicate_jersey': all_issues.count('DUPLICATE_JERSEY'),
        'partial_name': all_issues.count('PARTIAL_NAME'),
        'jersey_mismatch': all_issues.count('JERSEY_MISMATCH'),
        'review_total': sum(
            1 for r in results if r.issues and r.issues != ('NO_MATCH',)
        ),
    }


def print_summary(results: list[MatchResult], title: str = '') -> None:
    """Print a summary of match results to stdout.

    Args:
        results: List of match results.
        title: Name of the export file.
    """
    stats = compute_stats(results)

    print(f"\n=== Import-Vorschau: {title} ===")
    print(f"Spieler im Export:         {stats['total']:>5}")
    print(f"Ueber Trikotnummer:        {stats['by_jersey']:>5}")
    print(f"Ueber Namen:               {stats['by_name']:>5}")
    print(f"Kein Match gefunden:       {stats['unmatched']:>5}")
    print(f"Mit Pitching-Statistik:    {stats['pitchers']:>5}")
    print("---")
    print(f"Zu pruefen gesamt:         {stats['review_total']:>5}")
    print(f"  - Name weicht ab:        {stats['name_mismatch']:>5}")
    print(f"  - Trikotnummer doppelt:  {stats['duplicate_jersey']:>5}")
    print(f"  - Name nur teilweise:    {stats['partial_name']:>5}")
    print(f"  - Trikotnummer anders:   {stats['jersey_mismatch']:>5}")
    print()
