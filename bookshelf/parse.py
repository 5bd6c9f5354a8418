"""Parse and normalize raw book data into catalog records."""
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging

from bookshelf.models import Availability, Record

logger = logging.getLogger(__name__)


def parse_availability(data: Any) -> Optional[Availability]:
    """
    Parse an availability sub-record.

    Accepts "state" or "status", and "due_date" or "dueDate".

    Args:
        data: Raw availability dict

    Returns:
        Availability, or None when data is missing or not a dict
    """
    if not isinstance(data, dict):
        return None

    return Availability(
        state=data.get("state", data.get("status")),
        location=data.get("location"),
        due_date=data.get("due_date", data.get("dueDate"))
    )


def parse_record(item: Dict[str, Any]) -> Optional[Record]:
    """
    Parse a single book item.

    Args:
        item: Raw book dict

    Returns:
        Record object or None if parsing fails
    """
    try:
        record_id = item.get("id")
        if record_id is None:
            return None

        return Record(
            id=int(record_id),
            title=item.get("title"),
            author=item.get("author"),
            year=int(item["year"]) if item.get("year") is not None else None,
            category=item.get("category", item.get("genre")),
            availability=parse_availability(item.get("availability"))
        )
    except (AttributeError, TypeError, ValueError) as e:
        # Skip the item but keep loading the rest
        logger.warning(f"Failed to parse record: {e}")
        return None


def parse_records(payload: Union[List[Any], Dict[str, Any]]) -> List[Record]:
    """
    Parse a collection of book items.

    Args:
        payload: List of items, or a dict with a "books" list

    Returns:
        List of Record objects (unparseable items are skipped)
    """
    items = payload.get("books", []) if isinstance(payload, dict) else payload
    records = []

    for item in items:
        record = parse_record(item)
        if record:
            records.append(record)

    return records


def record_to_dict(record: Record) -> Dict[str, Any]:
    """Plain dict for export; empty availability fields are left out."""
    data: Dict[str, Any] = {
        "id": record.id,
        "title": record.title,
        "author": record.author,
        "year": record.year,
        "category": record.category,
    }

    if record.availability is not None:
        availability = {
            "state": record.availability.state,
            "location": record.availability.location,
            "due_date": record.availability.due_date,
        }
        data["availability"] = {k: v for k, v in availability.items() if v is not None}

    return data


def load_records(path: Union[str, Path]) -> List[Record]:
    """
    Load records from a JSON file.

    Raises:
        OSError: File cannot be read
        json.JSONDecodeError: File is not valid JSON
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    records = parse_records(payload)
    logger.info(f"Loaded {len(records)} records from {path}")
    return records
