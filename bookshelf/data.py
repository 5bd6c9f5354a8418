"""Sample book collection and category descriptions."""
from types import MappingProxyType
from typing import Any, Dict, List

CATEGORY_DESCRIPTIONS = MappingProxyType({
    "Programming": "Books about programming languages, paradigms, and techniques.",
    "Software Engineering": "Books focused on software design, patterns, and architecture.",
})


def sample_books() -> List[Dict[str, Any]]:
    """Return a fresh copy of the sample collection as raw dicts."""
    return [
        {
            "id": 1,
            "title": "The Clean Coder",
            "author": "Robert C. Martin",
            "year": 2011,
            "category": "Programming",
            "availability": {"state": "available", "location": "A1-23"},
        },
        {
            "id": 2,
            "title": "You Don't Know JS",
            "author": "Kyle Simpson",
            "year": 2014,
            "category": "Programming",
            "availability": {"state": "checked_out", "due_date": "2024-12-01"},
        },
        {
            # No availability: status is unknown
            "id": 3,
            "title": "Design Patterns",
            "author": "Gang of Four",
            "year": 1994,
            "category": "Software Engineering",
        },
        {
            "id": 4,
            "title": "Clean Architecture",
            "author": "Robert C. Martin",
            "year": 2017,
            "category": "Programming",
            "availability": {"state": "available", "location": "A2-15"},
        },
    ]
