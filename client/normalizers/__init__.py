from .pipeline import (
    get_default_normalizer,
    normalize_list,
    ListNormalizer,
    unwrap_envelope,
    extract_next_cursor,
    sort_records,
)
from .rules import RuleNormalizer, normalize_record, normalize_echo, slugify
from .coerce import coerce_text, pick_field, MAX_DEPTH
from .types import CanonicalRecord, RawRecord
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "normalize_list",
    "ListNormalizer",
    "unwrap_envelope",
    "extract_next_cursor",
    "sort_records",
    "RuleNormalizer",
    "normalize_record",
    "normalize_echo",
    "slugify",
    "coerce_text",
    "pick_field",
    "MAX_DEPTH",
    "CanonicalRecord",
    "RawRecord",
    "Normalizer",
]
