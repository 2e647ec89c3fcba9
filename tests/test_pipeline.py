import random

import pytest

from client.normalizers import (
    ListNormalizer,
    extract_next_cursor,
    get_default_normalizer,
    normalize_list,
    sort_records,
    unwrap_envelope,
)
from client.normalizers.types import CanonicalRecord

RECORDS = [{"title": "Alpha"}, {"title": "Beta"}]


@pytest.mark.parametrize("body", [
    RECORDS,
    {"data": RECORDS},
    {"items": RECORDS},
    {"results": RECORDS},
])
def test_envelopes(body):
    assert [r.id for r in normalize_list(body)] == ["alpha", "beta"]


def test_envelope_precedence():
    body = {"results": [{"title": "R"}], "items": [{"title": "I"}], "data": [{"title": "D"}]}
    assert [r.title for r in normalize_list(body)] == ["D"]
    # a non-list `data` does not block the next envelope
    body = {"data": {"nested": True}, "items": [{"title": "I"}]}
    assert [r.title for r in normalize_list(body)] == ["I"]


@pytest.mark.parametrize("body", [None, "", "text", 12, {}, {"data": None}, {"rows": RECORDS}, True])
def test_unknown_shapes_give_empty_list(body):
    assert unwrap_envelope(body) == []
    assert normalize_list(body) == []


def test_dedup_keeps_first_occurrence():
    out = normalize_list([{"title": "Alpha", "id": "x1"}, {"name": "Alpha v2", "id": "x1"}])
    assert len(out) == 1
    assert out[0].title == "Alpha"
    assert out[0].raw == {"title": "Alpha", "id": "x1"}


def test_dedup_preserves_relative_order():
    body = [{"title": "B"}, {"title": "A"}, {"title": "b"}, {"title": "C"}, {"id": "a"}]
    assert [r.id for r in normalize_list(body)] == ["b", "a", "c"]


def test_dedup_state_is_per_call():
    n = get_default_normalizer()
    assert len(n.normalize_list([{"id": "same"}])) == 1
    assert len(n.normalize_list([{"id": "same"}])) == 1


def test_synthesized_ids_use_position_in_batch():
    out = normalize_list([{"title": "Alpha"}, {}, 7, {}])
    assert [r.id for r in out] == ["alpha", "value_1", "value_2", "value_3"]


def test_custom_record_normalizer_is_used():
    class Upper:
        def normalize_record(self, raw, index):
            return CanonicalRecord(id=str(index), title=str(raw).upper(), pillar="P")
    out = ListNormalizer(Upper()).normalize_list(["a", "b"])
    assert [r.title for r in out] == ["A", "B"]


def _random_json(rng, depth=0):
    kinds = ["none", "str", "int", "float", "bool", "list", "dict"] if depth < 6 else ["str", "int"]
    kind = rng.choice(kinds)
    if kind == "none":
        return None
    if kind == "str":
        return rng.choice(["", " ", "Alpha", "ß-Beta", "!!", "42"])
    if kind == "int":
        return rng.randint(-5, 5)
    if kind == "float":
        return rng.choice([0.5, 3.0, float("nan"), float("inf")])
    if kind == "bool":
        return rng.random() < 0.5
    if kind == "list":
        return [_random_json(rng, depth + 1) for _ in range(rng.randint(0, 4))]
    keys = ["title", "Title", "name", "id", "ID", "valueId", "pillar", "data", "items", "desc", "x"]
    return {rng.choice(keys): _random_json(rng, depth + 1) for _ in range(rng.randint(0, 5))}


def test_never_raises_and_invariants_hold():
    rng = random.Random(1234)
    for _ in range(500):
        body = _random_json(rng)
        out = normalize_list(body)
        assert isinstance(out, list)
        ids = [r.id for r in out]
        assert len(ids) == len(set(ids))
        for r in out:
            assert r.id and r.title and r.pillar
            assert isinstance(r.description, str)


def test_next_cursor():
    assert extract_next_cursor({"data": [], "nextCursor": "abc"}) == "abc"
    assert extract_next_cursor({"nextPageToken": "p2"}) == "p2"
    assert extract_next_cursor({"data": {"next": "n"}}) == "n"
    assert extract_next_cursor({"nextCursor": None}) is None
    assert extract_next_cursor([]) is None


def test_natural_title_sort():
    recs = [CanonicalRecord(id=t, title=t, pillar="p") for t in ["Value 10", "value 2", "Alpha", "Value 1"]]
    assert [r.title for r in sort_records(recs)] == ["Alpha", "Value 1", "value 2", "Value 10"]
