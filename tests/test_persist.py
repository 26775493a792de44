import gzip
import json
from pathlib import Path

import pytest
from phraseindex.index.ordering import TokenOrdering
from phraseindex.index.positional import PositionalInvertedIndex
from phraseindex.index.persist import load_index, load_or_create, save_index

def _build(ordering=TokenOrdering.TOKEN_ORDER):
    idx = PositionalInvertedIndex(ordering=ordering)
    idx.index_document(1, "hello world hello rust")
    idx.index_document(2, "world of hell rust hello")
    idx.index_document(3, "hello rust")
    return idx

def _write_raw(path: Path, obj) -> None:
    with gzip.open(path, "wt", encoding="utf-8") as f:
        json.dump(obj, f)

def test_snapshot_round_trip_preserves_behavior():
    idx = _build(TokenOrdering.ASCENDING_FREQUENCY_ORDER)
    restored = PositionalInvertedIndex.from_snapshot(idx.to_snapshot())
    assert restored.ordering is TokenOrdering.ASCENDING_FREQUENCY_ORDER
    assert restored.postings == idx.postings
    assert restored.term_frequencies == idx.term_frequencies
    for q in ("hello rust", "hell", "world", "of hell rust", "nope"):
        assert restored.search(q) == idx.search(q)

def test_restored_index_does_not_share_containers():
    idx = _build()
    snap = idx.to_snapshot()
    restored = PositionalInvertedIndex.from_snapshot(snap)
    restored.index_document(9, "hello")
    assert 9 not in idx.postings["hello"]
    assert 9 not in snap["postings"]["hello"]

def test_save_and_load(tmp_path: Path):
    idx = _build()
    path = save_index(idx, tmp_path / "nested" / "idx.json.gz")
    assert path.exists()
    loaded = load_index(path)
    assert loaded.search("hello rust") == [1, 3]
    assert loaded.search("hell") == [2]
    assert loaded.approximate_posting_list_sizes_in_bytes() == idx.approximate_posting_list_sizes_in_bytes()
    # doc ids come back as ints even though JSON keys are strings
    assert set(loaded.postings["rust"]) == {1, 2, 3}

def test_save_empty_index(tmp_path: Path):
    path = save_index(PositionalInvertedIndex(), tmp_path / "empty.json.gz")
    loaded = load_index(path)
    assert len(loaded) == 0
    assert loaded.search("anything") == []

def test_load_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_index(tmp_path / "nope.json.gz")

def test_load_or_create(tmp_path: Path):
    path = tmp_path / "idx.json.gz"
    fresh = load_or_create(path, ordering=TokenOrdering.ASCENDING_FREQUENCY_ORDER)
    assert len(fresh) == 0
    assert fresh.ordering is TokenOrdering.ASCENDING_FREQUENCY_ORDER
    save_index(_build(), path)
    existing = load_or_create(path, ordering=TokenOrdering.ASCENDING_FREQUENCY_ORDER)
    # the stored ordering wins
    assert existing.ordering is TokenOrdering.TOKEN_ORDER
    assert existing.search("world") == [1, 2]

def _garble_body(raw: bytes) -> bytes:
    # keep the 10-byte gzip header, wreck the deflate stream after it
    end = min(52, len(raw) - 8)
    return raw[:12] + b"\xff" * (end - 12) + raw[end:]

def _truncate(raw: bytes) -> bytes:
    return raw[: len(raw) // 2]

@pytest.mark.parametrize("corrupt", [_garble_body, _truncate])
def test_load_rejects_corrupt_gzip_data(tmp_path: Path, corrupt):
    payload = json.dumps(_build().to_snapshot()).encode("utf-8")
    path = tmp_path / "corrupt.json.gz"
    path.write_bytes(corrupt(gzip.compress(payload)))
    with pytest.raises(ValueError, match="corrupt.json.gz"):
        load_index(path)

def test_load_rejects_non_gzip(tmp_path: Path):
    path = tmp_path / "plain.json.gz"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_index(path)

def test_load_rejects_bad_json(tmp_path: Path):
    path = tmp_path / "bad.json.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("{not json")
    with pytest.raises(ValueError, match="invalid JSON"):
        load_index(path)

@pytest.mark.parametrize("obj", [
    [],
    {"postings": {"a": {"1": [0]}}, "term_frequencies": {"a": 2}, "ordering": "token_order"},
    {"postings": {"a": {"1": [0]}}, "term_frequencies": {}, "ordering": "token_order"},
    {"postings": {"a": {"1": [3, 1]}}, "term_frequencies": {"a": 2}, "ordering": "token_order"},
    {"postings": {"a": {"-1": [0]}}, "term_frequencies": {"a": 1}, "ordering": "token_order"},
    {"postings": {"a": {}}, "term_frequencies": {"a": 1}, "ordering": "token_order"},
    {"postings": {"a": {"1": []}}, "term_frequencies": {"a": 1}, "ordering": "token_order"},
    {"postings": {}, "term_frequencies": {}, "ordering": "sideways"},
    {"postings": {"a": {"x": [0]}}, "term_frequencies": {"a": 1}, "ordering": "token_order"},
])
def test_load_rejects_malformed_snapshots(tmp_path: Path, obj):
    path = tmp_path / "bad.json.gz"
    _write_raw(path, obj)
    with pytest.raises(ValueError):
        load_index(path)

def test_save_overwrites_without_leftover_tmp_file(tmp_path: Path):
    path = tmp_path / "idx.json.gz"
    save_index(_build(), path)
    save_index(PositionalInvertedIndex(), path)
    assert not (tmp_path / "idx.json.gz.tmp").exists()
    assert len(load_index(path)) == 0
