"""
Tests for the local JSON response cache
"""
import json

import pytest

from gsc.cache import cache_key, load_cached, save_cached


def test_cache_key_is_stable_and_prefixed():
    a = cache_key("gsc_", "site", {"b": 1, "a": 2})
    b = cache_key("gsc_", "site", {"a": 2, "b": 1})
    assert a == b
    assert a.startswith("gsc_")
    assert cache_key("gsc_", "other") != a


def test_save_then_load(tmp_path):
    save_cached("k", {"rows": []}, tmp_path)
    assert load_cached("k", ttl=60, cache_dir=tmp_path) == {"rows": []}


def test_missing_entry(tmp_path):
    assert load_cached("k", ttl=60, cache_dir=tmp_path) is None


def test_expired_entry(tmp_path):
    (tmp_path / "k.json").write_text(json.dumps({"stored_at": 0, "data": {"rows": []}}))
    assert load_cached("k", ttl=60, cache_dir=tmp_path) is None


@pytest.mark.parametrize("content", ['{"stored_at": 1', "not json", "[]", '{"stored_at": "yesterday"}'])
def test_unreadable_entry_is_a_miss(tmp_path, content):
    (tmp_path / "k.json").write_text(content)
    assert load_cached("k", ttl=60, cache_dir=tmp_path) is None


def test_save_replaces_corrupt_entry_and_leaves_no_temp_files(tmp_path):
    (tmp_path / "k.json").write_text('{"stored_at": 1')

    save_cached("k", {"rows": [1]}, tmp_path)

    assert load_cached("k", ttl=60, cache_dir=tmp_path) == {"rows": [1]}
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]
