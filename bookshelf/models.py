"""Data models for catalog records."""
from dataclasses import dataclass, asdict
from typing import Optional, Dict

AVAILABLE = "available"
CHECKED_OUT = "checked_out"


@dataclass
class Availability:
    """Where and whether a record can currently be borrowed."""
    state: Optional[str] = None
    location: Optional[str] = None
    due_date: Optional[str] = None


@dataclass
class Record:
    """Single catalog entry."""
    id: int
    title: Optional[str] = None
    author: Optional[str] = None
    year: Optional[int] = None
    category: Optional[str] = None
    availability: Optional[Availability] = None

    @property
    def status(self) -> Optional[str]:
        """Availability state, or None when unknown."""
        return self.availability.state if self.availability else None


@dataclass(frozen=True)
class Statistics:
    """Aggregate counts over a record sequence."""
    total: int = 0
    available: int = 0
    checked_out: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
