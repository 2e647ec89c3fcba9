from dataclasses import dataclass, field
from typing import Any, Dict

# Upstream payloads have no stable schema; only the extraction helpers look inside.
RawRecord = Any


@dataclass(frozen=True)
class CanonicalRecord:
    """The stable shape every directory view consumes."""
    id: str
    title: str
    pillar: str
    description: str = ""
    raw: RawRecord = field(default=None, compare=False, repr=False)

    def as_row(self) -> Dict[str, str]:
        """Plain dict without `raw`, for tables and logging."""
        return {
            "id": self.id,
            "title": self.title,
            "pillar": self.pillar,
            "description": self.description,
        }
