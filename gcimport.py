"""gc-stats-matcher – CLI-Tool zum Abgleich von GameChanger-Statistik-Exporten mit dem Kader."""

import argparse
import logging
import sys
from pathlib import Path

from gcstats.importer import build_stats_import, write_json
from gcstats.matching import match_players
from gcstats.reader import read_export, read_roster
from gcstats.reporter import write_csv_report, write_html_report, print_summary
from gcstats.scoring import DEFAULT_NAME_THRESHOLD

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Abgleich von GameChanger-Statistik-Exporten gegen den Mannschaftskader.',
        prog='gcimport',
    )
    parser.add_argument(
        '--roster', required=True, type=Path,
        help='Pfad zur Kader-CSV-Datei (Spalten: id, name, jersey_number)',
    )
    parser.add_argument(
        '--export', type=Path,
        help='Pfad zur GameChanger-Export-Datei',
    )
    parser.add_argument(
        '--export-dir', type=Path,
        help='Verzeichnis mit GameChanger-Exporten (Batch-Modus)',
    )
    parser.add_argument(
        '--output', type=Path,
        help='Pfad fuer die Vorschau-Ausgabe (CSV)',
    )
    parser.add_argument(
        '--output-dir', type=Path,
        help='Verzeichnis fuer Vorschau-Ausgaben (Batch-Modus)',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Zusaetzlich eine HTML-Vorschau erzeugen',
    )
    parser.add_argument(
        '--json', action='store_true',
        help='Zusaetzlich die Import-Datei (JSON) fuer zugeordnete Spieler erzeugen',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Zusammenfassung auf stdout ausgeben',
    )
    parser.add_argument(
        '--name-threshold', type=float, default=DEFAULT_NAME_THRESHOLD,
        help=f'Mindest-Namensaehnlichkeit fuer Trikotnummer-Treffer '
             f'(Standard: {DEFAULT_NAME_THRESHOLD})',
    )
    return parser


def process_single_export(
    roster: list,
    export_path: Path,
    output_path: Path,
    html: bool,
    json_payload: bool,
    summary: bool,
    name_threshold: float,
) -> None:
    """Process a single export file against the roster."""
    parsed = read_export(export_path)
    results = match_players(parsed, roster, name_threshold)

    write_csv_report(results, output_path)

    if html:
        write_html_report(results, output_path.with_suffix('.html'), export_path.stem)

    if json_payload:
        write_json(build_stats_import(results), output_path.with_suffix('.json'))

    if summary:
        print_summary(results, export_path.name)


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    parser = build_parser()
    args = parser.parse_args()

    if not args.export and not args.export_dir:
        parser.error('Entweder --export oder --export-dir muss angegeben werden.')

    if args.export and not args.output:
        parser.error('--output ist erforderlich bei Verwendung von --export.')

    if args.export_dir and not args.output_dir:
        parser.error('--output-dir ist erforderlich bei Verwendung von --export-dir.')

    try:
        roster = read_roster(args.roster)
    except (FileNotFoundError, ValueError) as exc:
        log.error("Kader konnte nicht gelesen werden: %s", exc)
        sys.exit(1)

    if args.export:
        try:
            process_single_export(
                roster, args.export, args.output,
                args.html, args.json, args.summary, args.name_threshold,
            )
        except (FileNotFoundError, ValueError) as exc:
            log.error("%s: %s", args.export, exc)
            sys.exit(1)
    elif args.export_dir:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        csv_files = sorted(args.export_dir.glob('*.csv'))
        # Exclude the roster file from batch processing
        roster_resolved = args.roster.resolve()
        csv_files = [f for f in csv_files if f.resolve() != roster_resolved]

        if not csv_files:
            log.warning("Keine CSV-Dateien in %s gefunden.", args.export_dir)
            return

        for export_path in csv_files:
            output_path = args.output_dir / f"preview_{export_path.stem}.csv"
            log.info("Verarbeite %s ...", export_path.name)
            try:
                process_single_export(
                    roster, export_path, output_path,
                    args.html, args.json, args.summary, args.name_threshold,
                )
            except ValueError as exc:
                log.error("%s uebersprungen: %s", export_path.name, exc)


if __name__ == '__main__':
    main()
