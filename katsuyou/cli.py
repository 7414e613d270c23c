"""
Command line interface for katsuyou.

Usage:
    python -m katsuyou.cli 食べる v1               # conjugation table
    python -m katsuyou.cli -j 遊ぶ v5b             # full JSON
    python -m katsuyou.cli -t past 来る vk         # one conjugation type
    python -m katsuyou.cli init-db -j JMdict_e.gz  # build the form database
    python -m katsuyou.cli lookup 食べなかった     # find the dictionary form
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import Optional

from katsuyou import __version__
from katsuyou.conjugations import get_default_conjugator
from katsuyou.constants import conj_type_from_name
from katsuyou.db.connection import dispose_engine, get_db_path, get_session
from katsuyou.errors import ConfigurationError
from katsuyou.models import ConjugationResult
from katsuyou.output import format_conjugations
from katsuyou.settings import DEBUG, JMDICT_URL

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, default_level: int = logging.WARNING) -> None:
    """Configure root logging for command line use."""
    level = logging.DEBUG if verbose or DEBUG else default_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def init_db_command(args) -> int:
    """Build the conjugated form database from a JMdict file."""
    from katsuyou.dict_load import load_jmdict
    from katsuyou.settings import DEFAULT_DB_PATH

    jmdict_path = Path(args.jmdict) if args.jmdict else None
    if jmdict_path is None:
        # Check common locations
        for p in [Path('data/JMdict_e.gz'), Path('data/JMdict_e.xml'), Path('JMdict_e.gz'), Path('JMdict_e.xml')]:
            if p.exists():
                jmdict_path = p
                break
        else:
            print("Error: JMdict file not found.", file=sys.stderr)
            print(f"Download from: {JMDICT_URL}", file=sys.stderr)
            print("Or specify path with --jmdict", file=sys.stderr)
            return 1

    if not jmdict_path.exists():
        print(f"Error: JMdict file not found: {jmdict_path}", file=sys.stderr)
        return 1

    db_path = Path(args.output) if args.output else DEFAULT_DB_PATH

    # Confirm overwrite
    if db_path.exists() and not args.force:
        print(f"Database already exists: {db_path}")
        response = input("Overwrite? [y/N]: ").strip().lower()
        if response != 'y':
            print("Aborted.")
            return 1

    db_path.parent.mkdir(parents=True, exist_ok=True)

    # Build next to the target; the old database is replaced only on success
    build_path = db_path.with_name(db_path.name + '.tmp')
    if build_path.exists():
        build_path.unlink()

    print("Initializing database...")
    print(f"  JMdict: {jmdict_path}")
    print(f"  Output: {db_path}")

    def progress(count, total):
        if total is None and count % 50000 == 0:
            print(f"  {count:,} entries read...")

    t0 = time.perf_counter()
    try:
        session = get_session(build_path)
        try:
            stored = load_jmdict(
                session,
                get_default_conjugator(),
                path=jmdict_path,
                progress_callback=progress,
            )
        finally:
            session.close()
            dispose_engine(build_path)
    except Exception as e:
        print(f"Error initializing database: {e}", file=sys.stderr)
        logger.debug("init-db failed", exc_info=True)
        if build_path.exists():
            build_path.unlink()
        return 1

    dispose_engine(db_path)
    os.replace(build_path, db_path)

    elapsed = time.perf_counter() - t0
    print(f"Database initialized: {stored:,} entries in {elapsed:.1f}s")
    print("Set KATSUYOU_DB_PATH to use this database:")
    print(f'  export KATSUYOU_DB_PATH="{db_path.absolute()}"')
    return 0


def main_init_db(args: list) -> int:
    """CLI entry point for init-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Build the conjugated form database from JMdict',
        prog='katsuyou init-db',
    )

    parser.add_argument(
        '--jmdict', '-j',
        type=str,
        metavar='PATH',
        help='Path to JMdict XML file, plain or gzipped (default: data/JMdict_e.gz)',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help='Output database path (default: bundled data directory)',
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing database without prompting',
    )

    parsed = parser.parse_args(args)
    setup_logging(default_level=logging.INFO)
    return init_db_command(parsed)


def main_lookup(args: list) -> int:
    """CLI entry point for lookup subcommand."""
    from katsuyou.lookup import find_conjugated_forms

    parser = argparse.ArgumentParser(
        description='Find the dictionary form of a conjugated word',
        prog='katsuyou lookup',
    )

    parser.add_argument(
        'text',
        help='Conjugated form to look up',
    )

    parser.add_argument(
        '-d', '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to SQLite database file',
    )

    parsed = parser.parse_args(args)
    setup_logging()

    db_path = parsed.database or get_db_path()
    if not db_path or not Path(db_path).exists():
        print("Error: database not found. Run 'katsuyou init-db' first.", file=sys.stderr)
        return 1

    session = get_session(db_path)
    try:
        matches = find_conjugated_forms(session, parsed.text)
    finally:
        session.close()

    if not matches:
        print(f"No conjugated forms found for: {parsed.text}")
        return 0

    for match in matches:
        print(match.describe())
    return 0


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    # Check for subcommands
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'init-db':
        return main_init_db(args_list[1:])
    if args_list and args_list[0] == 'lookup':
        return main_lookup(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Command line interface for Katsuyou (Japanese conjugation tables)',
        prog='katsuyou',
        epilog='Subcommands:\n  katsuyou init-db    Build the form database from a JMdict file\n  katsuyou lookup     Find the dictionary form of a conjugated word',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'word',
        nargs='?',
        help='Headword in dictionary form (e.g. 食べる)',
    )

    parser.add_argument(
        'pos',
        nargs='?',
        help='JMdict part-of-speech tag (e.g. v1, v5k, adj-i, vk, vs-i)',
    )

    parser.add_argument(
        '-j', '--json',
        action='store_true',
        help='Output the paradigm as JSON',
    )

    parser.add_argument(
        '-t', '--type',
        type=str,
        default=None,
        metavar='NAME',
        help='Show one conjugation type only (e.g. past, potential, 3)',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'katsuyou {__version__}')
        return 0

    if not parsed.word or not parsed.pos:
        parser.print_help()
        return 1

    setup_logging(parsed.verbose)

    only = None
    if parsed.type:
        only = conj_type_from_name(parsed.type)
        if only is None:
            print(f"Error: unknown conjugation type: {parsed.type}", file=sys.stderr)
            return 1

    try:
        conjugator = get_default_conjugator()
    except ConfigurationError as e:
        print(f"Error loading conjugation rules: {e}", file=sys.stderr)
        return 1

    conjugations = conjugator.conjugate_tag(parsed.word, parsed.pos)
    if conjugations is None:
        print(f"Error: cannot conjugate {parsed.word} as {parsed.pos}", file=sys.stderr)
        return 1

    if parsed.json:
        result = ConjugationResult.from_conjugations(parsed.word, parsed.pos, conjugations)
        if only is not None:
            result.conjugations = [g for g in result.conjugations if g.conj_type == only]
        print(result.model_dump_json(indent=2))
    else:
        print(format_conjugations(parsed.word, parsed.pos, conjugations, only=only))

    return 0


if __name__ == '__main__':
    sys.exit(main())
