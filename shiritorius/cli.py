"""
Command line interface for Shiritorius.

Usage:
    shiritorius ingest                      # download and build the catalogue
    shiritorius ingest -f                   # force a fresh download
    shiritorius query yomiList.json --begin-with ネ --exclude ズ
    shiritorius query yomiList.json --length 3 --comparator at-most --json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from shiritorius import __version__
from shiritorius.catalogue import dump_catalogue, load_catalogue
from shiritorius.index import CatalogueIndex
from shiritorius.ingest import IngestionError, run_ingestion
from shiritorius.models import Conditions, LengthComparator
from shiritorius.query import default_conditions, describe_conditions, parse_fragments
from shiritorius.settings import ABOUT_PATH, CATALOGUE_PATH, DATA_DIR, DEBUG, SOURCE_URL

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if (verbose or DEBUG) else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


# ============================================================================
# ingest
# ============================================================================

def main_ingest(args: list) -> int:
    """CLI entry point for the ingest subcommand."""
    parser = argparse.ArgumentParser(
        description='Build the reading catalogue from the source dictionary',
        prog='shiritorius ingest',
    )
    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Force a download even if the archive exists',
    )
    parser.add_argument(
        '--url',
        default=SOURCE_URL,
        metavar='URL',
        help='Source archive URL',
    )
    parser.add_argument(
        '--work-dir',
        default=str(DATA_DIR),
        metavar='DIR',
        help=f'Directory for the downloaded archive (default: {DATA_DIR})',
    )
    parser.add_argument(
        '--output', '-o',
        default=str(CATALOGUE_PATH),
        metavar='PATH',
        help=f'Catalogue JSON path (default: {CATALOGUE_PATH})',
    )
    parsed = parser.parse_args(args)
    configure_logging()

    try:
        result = run_ingestion(
            url=parsed.url,
            work_dir=parsed.work_dir,
            output=parsed.output,
            about_path=ABOUT_PATH,
            force=parsed.force,
        )
    except IngestionError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    stats = result.stats
    print(f"Catalogue written: {result.output}")
    print(f"   Yomi: {stats.words:,}")
    print(f"   Homonyms: {stats.homonyms:,}")
    print(f"   Skipped lines: {stats.skipped:,}")
    print(f"   Invalid records: {stats.invalid:,}")
    print(f"   Non-katakana readings: {stats.rejected:,}")
    return 0


# ============================================================================
# query
# ============================================================================

def _fragments(values: Optional[List[str]]) -> tuple:
    fragments = []
    for value in values or ():
        fragments.extend(parse_fragments(value))
    return tuple(fragments)


def build_conditions(parsed, index: CatalogueIndex) -> Conditions:
    """
    Turn parsed query options into a Conditions object.

    Options left out fall back to the default condition set (nouns, not
    ending in ン).
    """
    changes = {
        field: _fragments(getattr(parsed, field))
        for field in ('begin_with', 'not_begin_with', 'end_with',
                      'not_end_with', 'include', 'exclude')
        if getattr(parsed, field) is not None
    }
    if parsed.all_pos:
        changes['parts_of_speech'] = index.all_parts_of_speech()
    elif parsed.pos:
        changes['parts_of_speech'] = parsed.pos

    defaults = default_conditions(index.all_parts_of_speech())
    return defaults.replace(
        length=parsed.length,
        length_comparator=LengthComparator.from_label(parsed.comparator),
        **changes,
    )


def main_query(args: list) -> int:
    """CLI entry point for the query subcommand."""
    parser = argparse.ArgumentParser(
        description='Select readings from a catalogue',
        prog='shiritorius query',
    )
    parser.add_argument(
        'catalogue',
        nargs='?',
        default=str(CATALOGUE_PATH),
        help=f'Catalogue JSON path (default: {CATALOGUE_PATH})',
    )
    for flag, label in [
        ('--begin-with', 'begin with'),
        ('--not-begin-with', 'do not begin with'),
        ('--end-with', 'end with'),
        ('--not-end-with', 'do not end with'),
        ('--include', 'contain'),
        ('--exclude', 'do not contain'),
    ]:
        parser.add_argument(
            flag,
            action='append',
            metavar='KANA',
            help=f'Readings that {label} this text (repeatable, hiragana accepted)',
        )
    parser.add_argument(
        '--length', '-n',
        type=int,
        default=None,
        metavar='N',
        help='Reading length to compare against',
    )
    parser.add_argument(
        '--comparator', '-c',
        default=LengthComparator.EXACTLY.value,
        choices=[c.value for c in LengthComparator] + [c.label for c in LengthComparator],
        help='How to compare the length (default: exactly)',
    )
    parser.add_argument(
        '--pos',
        action='append',
        metavar='LABEL',
        help='Part of speech to select (repeatable, default: 名詞)',
    )
    parser.add_argument(
        '--all-pos',
        action='store_true',
        help='Select every part of speech',
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print matching words as JSON',
    )
    parser.add_argument(
        '--limit', '-l',
        type=int,
        default=0,
        metavar='N',
        help='Print at most N readings (default: all)',
    )
    parsed = parser.parse_args(args)

    try:
        words = load_catalogue(parsed.catalogue)
    except (OSError, ValueError) as e:
        print(f"Error loading catalogue: {e}", file=sys.stderr)
        return 1

    index = CatalogueIndex(words)
    conditions = build_conditions(parsed, index)
    selected = index.filter(conditions)
    shown = selected[:parsed.limit] if parsed.limit > 0 else selected

    if parsed.json:
        print(json.dumps(dump_catalogue(shown), ensure_ascii=False))
        return 0

    for line in describe_conditions(conditions):
        print(f"# {line}")
    print(f"# {len(selected)} 件")
    for word in shown:
        print(word.reading)
    return 0


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'ingest':
        return main_ingest(args_list[1:])
    if args_list and args_list[0] == 'query':
        return main_query(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Shiritorius: find Japanese readings by prefix, suffix, length and part of speech',
        prog='shiritorius',
        epilog='Subcommands:\n  shiritorius ingest   Build the catalogue from the source dictionary\n  shiritorius query    Select readings from a catalogue',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )
    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'shiritorius {__version__}')
        return 0

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
