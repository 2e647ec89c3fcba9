import re
from typing import Any, Dict, Optional
from .base import Normalizer
from .coerce import pick_field
from .types import CanonicalRecord, RawRecord

# Candidate keys per canonical field. Order is the tie-break.
TITLE_KEYS = ("title", "valueTitle", "valueName", "name", "value", "label")
PILLAR_KEYS = (
    "pillar", "valuePillar", "valuePillarName", "pillarName",
    "pillarType", "category", "group", "domain",
)
DESCRIPTION_KEYS = ("description", "valueDescription", "desc", "details", "definition")
ID_KEYS = ("id", "valueId", "webknotValueId", "code", "key")

PILLAR_PLACEHOLDER = "—"
SLUG_MAX_LEN = 80


class RuleNormalizer(Normalizer):
    """
    Rule-based normalizer for directory values:
    pulls title/pillar/description/id out of whatever shape the API sent
    and fills the gaps so every record is usable by the views.
    """
    def normalize_record(self, raw: RawRecord, index: int) -> CanonicalRecord:
        return normalize_record(raw, index)


def normalize_record(raw: RawRecord, index: int = 0) -> CanonicalRecord:
    """Map one raw record to a CanonicalRecord. Total: never raises."""
    obj = raw if isinstance(raw, dict) else {}

    title = pick_field(obj, TITLE_KEYS)
    pillar = pick_field(obj, PILLAR_KEYS)
    description = pick_field(obj, DESCRIPTION_KEYS)
    rid = pick_field(obj, ID_KEYS) or slugify(title) or f"value_{index}"

    title = title or rid
    pillar = pillar or title or PILLAR_PLACEHOLDER
    return CanonicalRecord(id=rid, title=title, pillar=pillar, description=description, raw=raw)


def normalize_echo(
    echo: Any, fallback: Dict[str, str], fallback_id: Optional[str] = None
) -> CanonicalRecord:
    """
    Shape the record returned by a create/update call for an optimistic merge.

    The echo may be empty, wrapped, or partial; missing fields come from
    `fallback` (the submitted draft) and the id from `fallback_id`.
    """
    raw = echo if isinstance(echo, dict) and echo else dict(fallback)

    rid = pick_field(raw, ID_KEYS) or (fallback_id or "")
    title = pick_field(raw, TITLE_KEYS) or fallback.get("title", "")
    pillar = pick_field(raw, PILLAR_KEYS) or fallback.get("pillar", "")
    description = pick_field(raw, DESCRIPTION_KEYS) or fallback.get("description", "")

    rid = rid or slugify(title) or "value_0"
    title = title or rid
    return CanonicalRecord(
        id=rid,
        title=title,
        pillar=pillar or title or PILLAR_PLACEHOLDER,
        description=description,
        raw=raw,
    )


# --- Field helpers ---

_NON_SLUG = re.compile(r"[^a-z0-9]+")

def slugify(text: str) -> str:
    """Lowercase, hyphen-delimited id derived from a title ("" if nothing usable)."""
    if not text: return ""
    return _NON_SLUG.sub("-", text.lower()).strip("-")[:SLUG_MAX_LEN]
