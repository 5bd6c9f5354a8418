#!/usr/bin/env python3
"""Bookshelf Explorer CLI - browse and query the book catalog."""
import argparse
import csv
import json
import logging
import sys
from typing import List, Optional, Sequence

from tabulate import tabulate

from bookshelf.catalog import Catalog
from bookshelf.config import Config
from bookshelf.data import CATEGORY_DESCRIPTIONS, sample_books
from bookshelf.models import Record
from bookshelf.parse import load_records, parse_records, record_to_dict
from bookshelf.summary import (
    analyze,
    availability_phrase,
    describe_criteria,
    format_statistics,
    make_formatter,
    summarize,
)

logger = logging.getLogger(__name__)


def setup_catalog(args, config: Config) -> Catalog:
    """Build a catalog from --data, CATALOG_DATA_PATH or the sample books."""
    path = args.data or config.CATALOG_DATA_PATH
    if path:
        records = load_records(path)
    else:
        records = parse_records(sample_books())
    return Catalog(records)


def display_records(records: Sequence[Record], format_type: str):
    """Display records in specified format."""
    if format_type == "table":
        headers = ["ID", "Title", "Author", "Year", "Category", "Availability"]
        rows = [
            [
                record.id,
                record.title[:50] + "..." if record.title and len(record.title) > 50 else record.title,
                record.author or "Unknown",
                record.year or "N/A",
                record.category or "None",
                availability_phrase(record.availability)
            ]
            for record in records
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([record_to_dict(record) for record in records], indent=2))

    elif format_type == "compact":
        for i, record in enumerate(records, 1):
            print(f"{i}. {record.title} - {record.author}")


def list_records(args, catalog: Catalog):
    """List every record in the catalog."""
    display_records(catalog.records, args.format)


def search_records(args, catalog: Catalog):
    """Search by title, author and category."""
    criteria = {
        "title": args.title,
        "author": args.author,
        "category": args.category
    }
    results = catalog.search(criteria, case_sensitive=args.case_sensitive)

    print(f"\nSearch Results ({describe_criteria(criteria)}):")
    if not results:
        print("No matching books found.")
        return
    display_records(results, args.format)


def filter_status(args, catalog: Catalog):
    """Show records with the given availability state."""
    display_records(catalog.filter_by_status(args.state), args.format)


def show_groups(args, catalog: Catalog):
    """Show records grouped by category."""
    for category, records in catalog.group_by_category().items():
        description = CATEGORY_DESCRIPTIONS.get(category, "")
        print(f"\n{category or 'Uncategorized'} ({len(records)})")
        if description:
            print(f"  {description}")
        for record in records:
            print(f"  - {record.title}")


def show_titles(args, catalog: Catalog):
    """Print titles one per line."""
    for title in catalog.title_sequence():
        print(title)


def show_stats(args, catalog: Catalog):
    """Show catalog statistics."""
    print("\n" + format_statistics(catalog.statistics()) + "\n")


def show_analysis(args, catalog: Catalog):
    """Show publication decades, category distribution and top author."""
    if not len(catalog):
        print("No books available for analysis.")
        return

    analysis = analyze(catalog.records)

    print("\nPublication Decades")
    print(tabulate(sorted(analysis.decades.items()), headers=["Decade", "Books"]))

    print("\nCategory Distribution")
    print(tabulate(list(analysis.categories.items()), headers=["Category", "Books"]))

    if analysis.most_prolific:
        author, count = analysis.most_prolific
        print(f"\nMost Prolific Author: {author} ({count} books)")


def show_summaries(args, catalog: Catalog):
    """Print a one-line synopsis per record."""
    format_all = make_formatter(summarize)
    for line in format_all(catalog.records):
        print(line)


def export_data(args, catalog: Catalog):
    """Export catalog records."""
    records = catalog.records

    if args.format == "json":
        data = [record_to_dict(record) for record in records]

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            logger.info(f"Exported {len(records)} books to {args.output}")
        else:
            print(json.dumps(data, indent=2))

    elif args.format == "csv":
        output_file = args.output or "books_export.csv"
        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(["ID", "Title", "Author", "Year", "Category", "State", "Location", "Due Date"])

            for record in records:
                availability = record.availability
                writer.writerow([
                    record.id,
                    record.title or "",
                    record.author or "",
                    record.year or "",
                    record.category or "",
                    availability.state or "" if availability else "",
                    availability.location or "" if availability else "",
                    availability.due_date or "" if availability else ""
                ])

        logger.info(f"Exported {len(records)} books to {output_file}")


COMMANDS = {
    "list": list_records,
    "search": search_records,
    "status": filter_status,
    "group": show_groups,
    "titles": show_titles,
    "stats": show_stats,
    "analyze": show_analysis,
    "summary": show_summaries,
    "export": export_data,
}


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Bookshelf Explorer - browse and query the book catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Case-insensitive search
  %(prog)s search --author martin --category programming

  # Books currently on the shelf
  %(prog)s status available --format compact

  # Use your own collection
  %(prog)s --data books.json stats
        """
    )
    parser.add_argument("--data", help="JSON file with books (default: built-in sample)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    formats = ["table", "json", "compact"]
    default_format = config.DEFAULT_FORMAT
    if default_format not in formats:
        logger.warning(f"Unknown DEFAULT_FORMAT '{default_format}', using 'table'")
        default_format = "table"

    list_parser = subparsers.add_parser("list", help="List all books")
    list_parser.add_argument("--format", choices=formats, default=default_format, help="Output format")

    search_parser = subparsers.add_parser("search", help="Search for books")
    search_parser.add_argument("--title", help="Title substring")
    search_parser.add_argument("--author", help="Author substring")
    search_parser.add_argument("--category", help="Exact category")
    search_parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    search_parser.add_argument("--format", choices=formats, default=default_format, help="Output format")

    status_parser = subparsers.add_parser("status", help="Filter books by availability state")
    status_parser.add_argument("state", help="available or checked_out")
    status_parser.add_argument("--format", choices=formats, default=default_format, help="Output format")

    subparsers.add_parser("group", help="Group books by category")
    subparsers.add_parser("titles", help="List book titles")
    subparsers.add_parser("stats", help="Show catalog statistics")
    subparsers.add_parser("analyze", help="Analyze the collection")
    subparsers.add_parser("summary", help="One-line summary per book")

    export_parser = subparsers.add_parser("export", help="Export catalog data")
    export_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Export format")
    export_parser.add_argument("--output", help="Output file (default: stdout for JSON)")

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    config = Config()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    parser = build_parser(config)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        catalog = setup_catalog(args, config)
        COMMANDS[args.command](args, catalog)

    except KeyboardInterrupt:
        logger.info("\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
