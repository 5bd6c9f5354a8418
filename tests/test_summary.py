"""Tests for summaries and reports."""
import pytest

from bookshelf.models import Availability, Record, Statistics
from bookshelf.summary import (
    analyze,
    availability_phrase,
    describe_criteria,
    format_statistics,
    make_formatter,
    summarize,
)


def test_summarize_available_with_location():
    record = Record(1, "The Clean Coder", "Robert C. Martin", 2011, "Programming",
                    Availability(state="available", location="A1-23"))
    assert summarize(record) == "The Clean Coder by Robert C. Martin (2011) - Available at A1-23"


@pytest.mark.parametrize("availability, phrase", [
    (Availability(state="available"), "Available at Unknown Location"),
    (Availability(state="checked_out", due_date="2024-12-01"), "Checked out, due on 2024-12-01"),
    (Availability(state="checked_out"), "Checked out, due on N/A"),
    (Availability(state="lost"), "Status Unknown"),
    (Availability(), "Status Unknown"),
    (None, "Status Unknown"),
])
def test_availability_phrase(availability, phrase):
    assert availability_phrase(availability) == phrase


def test_make_formatter_maps_in_order(records):
    format_all = make_formatter(lambda r: r.id)
    assert format_all(records) == [1, 2, 3, 4]


def test_make_formatter_propagates_errors(records):
    def broken(record):
        raise RuntimeError("formatter failed")

    with pytest.raises(RuntimeError, match="formatter failed"):
        make_formatter(broken)(records)


def test_format_statistics():
    text = format_statistics(Statistics(total=4, available=2, checked_out=1))

    assert "Total Books       : 4" in text
    assert "Available Books   : 2" in text
    assert "Checked Out Books : 1" in text


def test_describe_criteria():
    assert describe_criteria({}) == "All Books"
    assert describe_criteria(None) == "All Books"
    assert describe_criteria({"title": "clean", "author": None, "category": "Programming"}) == \
        'Title: "clean", Category: "Programming"'


def test_analyze(records):
    analysis = analyze(records)

    assert analysis.decades == {2010: 3, 1990: 1}
    assert analysis.categories == {"Programming": 3, "Software Engineering": 1}
    assert analysis.most_prolific == ("Robert C. Martin", 2)


def test_analyze_empty():
    analysis = analyze([])

    assert analysis.decades == {}
    assert analysis.most_prolific is None


def test_analyze_tie_prefers_first_seen():
    records = [Record(1, author="Zed"), Record(2, author="Amy")]
    assert analyze(records).most_prolific == ("Zed", 1)


def test_availability_phrase_keeps_empty_strings():
    """Empty strings count as present, like in Catalog.update."""
    assert availability_phrase(Availability(state="available", location="")) == "Available at "
    assert availability_phrase(Availability(state="checked_out", due_date="")) == "Checked out, due on "
