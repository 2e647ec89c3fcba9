# client/normalizers/base.py
from typing import Protocol
from .types import CanonicalRecord, RawRecord

class Normalizer(Protocol):
    def normalize_record(self, raw: RawRecord, index: int) -> CanonicalRecord:
        """Return a NEW canonical record. Never raise, never mutate `raw`."""
        ...
