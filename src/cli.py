"""Command line interface: parse a file, search it, or list top earners."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.ingest.parser import EmptyResultError, parse_records_with_source
from src.records.presentation import analyze_records, clipboard_line, name_with_dob, top_earners
from src.records.schema import IncomeRecord
from src.search.engine import search


def _format_record(record: IncomeRecord) -> str:
    income = f"{record.income:.0f}" if record.income.is_integer() else str(record.income)
    return "\t".join([record.name, income, record.dob or ""])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract people and incomes from a file and search them.")
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Print every record recovered from the file.")
    parse_cmd.add_argument("path", help="Input file (JSON array, delimited table or plain text).")

    search_cmd = sub.add_parser("search", help="Print records whose name matches the query.")
    search_cmd.add_argument("path", help="Input file.")
    search_cmd.add_argument("query", help="Partial, possibly misspelled name.")

    top_cmd = sub.add_parser("top", help="Print the highest incomes as copy-ready lines.")
    top_cmd.add_argument("path", help="Input file.")
    top_cmd.add_argument("-n", type=int, default=None, help="Number of people (default: TOP_N).")
    top_cmd.add_argument("--org", default=None, help="Organization name (default: ORG_NAME).")
    top_cmd.add_argument("--inn", default=None, help="Organization INN (default: ORG_INN).")
    top_cmd.add_argument(
        "--reverse",
        action="store_true",
        default=None,
        help="Print '<inn> <org> <name>' instead of '<name> <org> <inn>'.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""

    args = _build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        content = Path(args.path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {args.path} as text: {exc}", file=sys.stderr)
        return 1

    try:
        records = parse_records_with_source(content, synonyms=settings.synonym_table()).records
    except EmptyResultError:
        print("No valid data found in the file.", file=sys.stderr)
        return 1

    if args.command == "parse":
        for record in records:
            print(_format_record(record))
    elif args.command == "search":
        for person in analyze_records(search(args.query, records)):
            print(name_with_dob(person))
    else:
        n = args.n if args.n is not None else settings.top_n
        if n <= 0:
            print("-n must be a positive integer", file=sys.stderr)
            return 2
        people = analyze_records(
            top_earners(records, n),
            org=args.org if args.org is not None else settings.org_name,
            inn=args.inn if args.inn is not None else settings.org_inn,
        )
        reverse = settings.reverse_copy_order if args.reverse is None else args.reverse
        for person in people:
            print(clipboard_line(person, reverse=reverse))
    return 0


if __name__ == "__main__":
    sys.exit(main())
