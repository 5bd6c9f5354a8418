"""Human-readable summaries and reports over catalog records."""
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar

from bookshelf.models import AVAILABLE, CHECKED_OUT, Availability, Record, Statistics

T = TypeVar("T")

UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_DUE_DATE = "N/A"
STATUS_UNKNOWN = "Status Unknown"


def availability_phrase(availability: Optional[Availability]) -> str:
    """
    Describe an availability sub-record.

    Args:
        availability: Availability or None

    Returns:
        Display phrase; "Status Unknown" when availability or its state is missing
    """
    if availability is None or availability.state is None:
        return STATUS_UNKNOWN

    state = availability.state.strip().lower()
    if state == AVAILABLE:
        location = availability.location
        return f"Available at {UNKNOWN_LOCATION if location is None else location}"
    if state == CHECKED_OUT:
        due_date = availability.due_date
        return f"Checked out, due on {UNKNOWN_DUE_DATE if due_date is None else due_date}"
    return STATUS_UNKNOWN


def summarize(record: Record) -> str:
    """
    Build a one-line synopsis.

    Example:
        "The Clean Coder by Robert C. Martin (2011) - Available at A1-23"
    """
    return (
        f"{record.title} by {record.author} ({record.year}) - "
        f"{availability_phrase(record.availability)}"
    )


def make_formatter(formatter: Callable[[Record], T]) -> Callable[[Sequence[Record]], List[T]]:
    """Lift a per-record formatter to one that maps over a sequence."""
    def format_all(records: Sequence[Record]) -> List[T]:
        return [formatter(record) for record in records]
    return format_all


def format_statistics(stats: Statistics) -> str:
    """Format statistics as a small text block."""
    lines = [
        "Library Statistics",
        "-" * 22,
        f"Total Books       : {stats.total}",
        f"Available Books   : {stats.available}",
        f"Checked Out Books : {stats.checked_out}",
    ]
    return "\n".join(lines)


def describe_criteria(criteria: Optional[Mapping[str, Optional[str]]]) -> str:
    """Label for a set of search criteria, e.g. 'Title: "clean"'."""
    criteria = criteria or {}
    parts = [
        f'{key.capitalize()}: "{criteria[key]}"'
        for key in ("title", "author", "category")
        if criteria.get(key)
    ]
    return ", ".join(parts) or "All Books"


@dataclass
class Analysis:
    """Collection insights: decades, category distribution, top author."""
    decades: Dict[int, int] = field(default_factory=dict)
    categories: Dict[Optional[str], int] = field(default_factory=dict)
    most_prolific: Optional[Tuple[str, int]] = None


def analyze(records: Sequence[Record]) -> Analysis:
    """
    Analyze a record collection.

    Args:
        records: Records to analyze

    Returns:
        Analysis with counts per publication decade and per category, and
        the author with the most records (first seen wins ties)
    """
    decades: Dict[int, int] = {}
    categories: Dict[Optional[str], int] = {}

    for record in records:
        if record.year is not None:
            decade = record.year // 10 * 10
            decades[decade] = decades.get(decade, 0) + 1
        categories[record.category] = categories.get(record.category, 0) + 1

    authors = Counter(record.author for record in records if record.author)
    most_prolific = authors.most_common(1)[0] if authors else None

    return Analysis(
        decades=decades,
        categories=categories,
        most_prolific=most_prolific
    )
