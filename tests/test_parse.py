"""Tests for parsing functions."""
import json

import pytest

from bookshelf.data import sample_books
from bookshelf.models import Availability, Record
from bookshelf.parse import load_records, parse_record, parse_records, record_to_dict


def test_parse_record_complete():
    """Test parsing a book with all fields present."""
    item = {
        "id": 1,
        "title": "The Clean Coder",
        "author": "Robert C. Martin",
        "year": 2011,
        "category": "Programming",
        "availability": {"state": "available", "location": "A1-23"}
    }

    record = parse_record(item)

    assert record is not None
    assert record.id == 1
    assert record.title == "The Clean Coder"
    assert record.year == 2011
    assert record.availability == Availability(state="available", location="A1-23")


def test_parse_record_original_keys():
    """Test that genre/status/dueDate spellings are accepted."""
    item = {
        "id": "2",
        "title": "You Don't Know JS",
        "genre": "Programming",
        "availability": {"status": "checked_out", "dueDate": "2024-12-01"}
    }

    record = parse_record(item)

    assert record.id == 2
    assert record.category == "Programming"
    assert record.availability.state == "checked_out"
    assert record.availability.due_date == "2024-12-01"


def test_parse_record_missing_fields():
    """Test parsing a book with missing optional fields."""
    record = parse_record({"id": 3, "title": "Design Patterns"})

    assert record is not None
    assert record.author is None
    assert record.year is None
    assert record.availability is None


def test_parse_record_malformed_availability():
    """Test that a non-dict availability is treated as unknown."""
    record = parse_record({"id": 3, "title": "X", "availability": "on the shelf"})
    assert record.availability is None


def test_parse_record_no_id():
    """Test that book without ID returns None."""
    assert parse_record({"title": "No ID Book"}) is None


def test_parse_record_bad_year():
    """Test that an unparseable item is skipped, not raised."""
    assert parse_record({"id": 5, "year": "nineteen"}) is None
    assert parse_record("not a dict") is None


def test_parse_records_wrapped_and_list():
    """Test parsing both payload shapes."""
    items = [{"id": 1, "title": "Book 1"}, {"title": "No id"}, {"id": 2, "title": "Book 2"}]

    from_list = parse_records(items)
    from_dict = parse_records({"books": items})

    assert [r.title for r in from_list] == ["Book 1", "Book 2"]
    assert [r.title for r in from_dict] == ["Book 1", "Book 2"]


def test_parse_sample_books():
    """Test that the built-in sample collection parses completely."""
    records = parse_records(sample_books())

    assert [r.id for r in records] == [1, 2, 3, 4]
    assert records[2].availability is None


def test_record_to_dict_omits_empty_availability_fields():
    record = Record(1, "A", "Ann", 2000, "X", Availability(state="available"))

    assert record_to_dict(record) == {
        "id": 1,
        "title": "A",
        "author": "Ann",
        "year": 2000,
        "category": "X",
        "availability": {"state": "available"}
    }
    assert "availability" not in record_to_dict(Record(2, "B"))


def test_load_records(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(json.dumps({"books": sample_books()}))

    records = load_records(path)

    assert len(records) == 4
    assert records[0].title == "The Clean Coder"


def test_load_records_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_records(tmp_path / "missing.json")
