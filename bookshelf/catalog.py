"""In-memory catalog of records with query and statistics operations."""
from dataclasses import fields
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, Union
import logging

from bookshelf.models import AVAILABLE, CHECKED_OUT, Availability, Record, Statistics
from bookshelf.summary import summarize

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("title", "author", "category")

RECORD_FIELDS = tuple(f.name for f in fields(Record))
AVAILABILITY_FIELDS = tuple(f.name for f in fields(Availability))


def _normalize(value: Optional[str]) -> Optional[str]:
    """Strip and lower-case a status or category value."""
    if value is None:
        return None
    return value.strip().lower()


class TitleSequence:
    """
    Lazy, restartable sequence of titles over a live catalog.

    Each call to iter() walks the catalog's current records, so records
    added after the sequence was created show up on the next pass.
    """

    def __init__(self, catalog: "Catalog"):
        self._catalog = catalog

    def __iter__(self) -> Iterator[Optional[str]]:
        for record in self._catalog.records:
            yield record.title


class Catalog:
    """Ordered collection of records with cached statistics."""

    def __init__(self, records: Optional[Sequence[Record]] = None):
        """
        Initialize catalog.

        Args:
            records: Optional seed records (copied, never aliased)
        """
        self._records: List[Record] = list(records or [])
        self._statistics = Statistics()
        self._refresh_statistics()

    @property
    def records(self) -> Tuple[Record, ...]:
        """Snapshot of the current record sequence."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def add(self, records: Iterable[Record]) -> None:
        """
        Append records to the end of the catalog.

        Args:
            records: Records to append, in order. Duplicate ids are allowed.
        """
        records = list(records)
        if not records:
            return

        self._records.extend(records)
        logger.info(f"Added {len(records)} record(s) to the catalog")
        self._refresh_statistics()

    def search(
        self,
        criteria: Optional[Mapping[str, Optional[str]]] = None,
        case_sensitive: bool = False
    ) -> List[Record]:
        """
        Search records by title, author and category.

        Title and author match on substring; category must match exactly
        after whitespace is stripped (and case folded, unless case_sensitive).
        Omitted or empty criteria always match.

        Args:
            criteria: Mapping with optional title, author, category keys
            case_sensitive: Compare without lower-casing both sides

        Returns:
            Matching records in catalog order (empty if none match)
        """
        criteria = criteria or {}
        wanted = {
            key: criteria.get(key)
            for key in SEARCH_FIELDS
            if criteria.get(key)
        }

        def fold(value: str) -> str:
            return value if case_sensitive else value.lower()

        def matches(record: Record) -> bool:
            for key, needle in wanted.items():
                haystack = getattr(record, key)
                if haystack is None:
                    return False
                if key == "category":
                    if fold(haystack.strip()) != fold(needle.strip()):
                        return False
                elif fold(needle) not in fold(haystack):
                    return False
            return True

        results = [record for record in self._records if matches(record)]
        logger.debug(f"Search {wanted} matched {len(results)} record(s)")
        return results

    def update(
        self,
        record: Optional[Record],
        updates: Optional[Union[Mapping[str, Any], Record]]
    ) -> Optional[Record]:
        """
        Fill in the blanks of a record from a partial update.

        A field is assigned only when its current value is None; values
        already present (including "" and 0) are kept. Availability is
        merged field by field the same way.

        Args:
            record: Record to mutate in place
            updates: Mapping of field name to value, or another Record

        Returns:
            The updated record, or None if either argument is missing
        """
        if record is None or updates is None:
            logger.debug("Update skipped: missing record or updates")
            return None

        if isinstance(updates, Record):
            updates = {name: getattr(updates, name) for name in RECORD_FIELDS}

        for key, value in updates.items():
            if key not in RECORD_FIELDS:
                logger.debug(f"Ignoring unknown field in update: {key}")
                continue
            if value is None:
                continue
            if key == "availability":
                self._merge_availability(record, value)
            elif getattr(record, key) is None:
                setattr(record, key, value)

        logger.info(f"Updated record: {record.title}")
        self._refresh_statistics()
        return record

    def statistics(self) -> Statistics:
        """Current statistics snapshot."""
        return self._statistics

    def group_by_category(self) -> Dict[Optional[str], List[Record]]:
        """
        Group records by category.

        Returns:
            Mapping of category to records, in first-seen category order
        """
        grouped: Dict[Optional[str], List[Record]] = {}
        for record in self._records:
            grouped.setdefault(record.category, []).append(record)
        return grouped

    def filter_by_status(self, state: Optional[str]) -> List[Record]:
        """Records whose availability state equals state (case-insensitive)."""
        wanted = _normalize(state)
        if wanted is None:
            return []
        return [
            record for record in self._records
            if _normalize(record.status) == wanted
        ]

    def title_sequence(self) -> TitleSequence:
        """Lazy iterable of titles in catalog order."""
        return TitleSequence(self)

    def summarize(self, record: Record) -> str:
        """One-line synopsis of a record."""
        return summarize(record)

    def authors(self) -> Set[str]:
        """Unique authors in the catalog."""
        return {record.author for record in self._records if record.author}

    def _merge_availability(
        self,
        record: Record,
        value: Union[Mapping[str, Any], Availability]
    ):
        if isinstance(value, Availability):
            value = {name: getattr(value, name) for name in AVAILABILITY_FIELDS}

        filled = {
            key: sub_value for key, sub_value in value.items()
            if key in AVAILABILITY_FIELDS and sub_value is not None
        }
        if not filled:
            return

        if record.availability is None:
            record.availability = Availability()

        for key, sub_value in filled.items():
            if getattr(record.availability, key) is None:
                setattr(record.availability, key, sub_value)

    def _refresh_statistics(self):
        states = [_normalize(record.status) for record in self._records]
        self._statistics = Statistics(
            total=len(states),
            available=states.count(AVAILABLE),
            checked_out=states.count(CHECKED_OUT)
        )
        logger.debug(f"Statistics refreshed: {self._statistics}")
