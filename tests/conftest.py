"""Shared fixtures."""
import pytest

from bookshelf.catalog import Catalog
from bookshelf.data import sample_books
from bookshelf.parse import parse_records


@pytest.fixture
def records():
    return parse_records(sample_books())


@pytest.fixture
def catalog(records):
    return Catalog(records)
