"""
Catalog data model
Record value type and the fixed seed set
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Record:
    """One catalog entry. Immutable so snapshots can share instances safely."""

    id: str
    title: str = ""
    artist: str = ""
    price: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


SEED_RECORDS: Tuple[Record, ...] = (
    Record(id="1", title="Shape of You", artist="Ed Sheeran", price=1.29),
    Record(id="2", title="Blinding Lights", artist="The Weeknd", price=1.29),
    Record(id="3", title="Dance Monkey", artist="Tones and I", price=1.29),
)
