import re
from typing import Any, Iterable, List, Optional
from .base import Normalizer
from .types import CanonicalRecord
from .rules import RuleNormalizer

# Envelope keys, in precedence order, that may wrap the record list.
ENVELOPE_KEYS = ("data", "items", "results")
CURSOR_KEYS = ("nextCursor", "next", "nextToken", "nextPageToken")


class ListNormalizer:
    """
    Turns a whole response body into a deduplicated list of canonical records.
    The per-record work is delegated to a Normalizer, so a smarter stage can
    be swapped in without touching envelope or dedup handling.
    """
    def __init__(self, record_normalizer: Optional[Normalizer] = None):
        self.record_normalizer = record_normalizer or RuleNormalizer()

    def normalize_list(self, body: Any) -> List[CanonicalRecord]:
        seen = set()  # per call, never shared
        out: List[CanonicalRecord] = []
        for i, raw in enumerate(unwrap_envelope(body)):
            rec = self.record_normalizer.normalize_record(raw, i)
            if rec.id in seen:
                continue
            seen.add(rec.id)
            out.append(rec)
        return out


def get_default_normalizer() -> ListNormalizer:
    """Factory for the default list normalizer (rule-based records)."""
    return ListNormalizer(RuleNormalizer())


def normalize_list(body: Any) -> List[CanonicalRecord]:
    return get_default_normalizer().normalize_list(body)


# --- Envelope helpers ---

def unwrap_envelope(body: Any) -> list:
    """bare list > data > items > results > []"""
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in ENVELOPE_KEYS:
            if isinstance(body.get(key), list):
                return body[key]
    return []


def extract_next_cursor(body: Any) -> Optional[str]:
    """Pagination token from an enveloped body, or None."""
    if not isinstance(body, dict):
        return None
    roots = [body]
    if isinstance(body.get("data"), dict):
        roots.append(body["data"])
    for root in roots:
        for key in CURSOR_KEYS:
            token = root.get(key)
            if isinstance(token, str) and token:
                return token
    return None


_DIGITS = re.compile(r"(\d+)")

def natural_key(text: str):
    """Sort key comparing digit runs numerically: "Value 2" < "Value 10"."""
    return [int(t) if t.isdecimal() else t.casefold() for t in _DIGITS.split(text or "")]


def sort_records(records: Iterable[CanonicalRecord]) -> List[CanonicalRecord]:
    return sorted(records, key=lambda r: natural_key(r.title))
