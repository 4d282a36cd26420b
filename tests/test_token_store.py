"""
Tests for token store
"""

import json
from src.services.token_store import TokenStore


def test_set_and_get(tmp_path):
    """Test token round trip through the file"""
    store_file = tmp_path / "nested" / "auth.json"
    store = TokenStore(store_file=str(store_file))

    store.set("abc123")

    assert store.get() == "abc123"
    assert json.loads(store_file.read_text(encoding="utf-8")) == {"authToken": "abc123"}
    # a fresh instance sees the persisted value
    assert TokenStore(store_file=str(store_file)).get() == "abc123"


def test_get_without_file(tmp_path):
    store = TokenStore(store_file=str(tmp_path / "missing.json"))
    assert store.get() is None


def test_clear_keeps_other_keys(tmp_path):
    """Test clearing removes only the token"""
    store_file = tmp_path / "auth.json"
    store_file.write_text(json.dumps({"authToken": "abc123", "theme": "dark"}), encoding="utf-8")
    store = TokenStore(store_file=str(store_file))

    store.clear()

    assert store.get() is None
    assert json.loads(store_file.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_corrupt_file_reads_as_logged_out(tmp_path):
    """Test unreadable storage is treated as no token"""
    store_file = tmp_path / "auth.json"
    store_file.write_text("{not json", encoding="utf-8")
    store = TokenStore(store_file=str(store_file))

    assert store.get() is None

    store.set("abc123")
    assert store.get() == "abc123"
