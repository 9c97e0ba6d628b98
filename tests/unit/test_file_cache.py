"""Unit tests for FileCache adapter."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from repochain.adapters.cache import FileCache
from repochain.core.exceptions import CacheCorruptError
from repochain.core.models import Entity


@pytest.mark.cache
class TestLookup:
    """Tests for lookup() method."""

    def test_lookup_nonexistent_key_returns_none(self, tmp_path: Path) -> None:
        cache = FileCache(cache_dir=tmp_path)
        assert cache.lookup("missing") is None

    def test_lookup_returns_none_when_metadata_missing(self, tmp_path: Path) -> None:
        """An entry without its sidecar is an incomplete write, treated as a miss."""
        cache = FileCache(cache_dir=tmp_path)
        (tmp_path / "1.json").write_text('{"id": 1}')

        assert cache.lookup("1") is None

    def test_lookup_corrupt_entry_raises(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("1", widget)
        (tmp_path / "1.json").write_text("{not json")

        with pytest.raises(CacheCorruptError) as exc_info:
            cache.lookup("1")

        assert exc_info.value.key == "1"
        assert exc_info.value.path == tmp_path / "1.json"
        assert exc_info.value.recovery_hint is not None

    def test_lookup_entry_without_id_raises(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("1", widget)
        (tmp_path / "1.json").write_text('{"name": "Widget"}')

        with pytest.raises(CacheCorruptError):
            cache.lookup("1")

    @pytest.mark.parametrize("key", ["", "a/b", "..", ".hidden", "x.meta"])
    def test_invalid_keys_raise(self, tmp_path: Path, key: str) -> None:
        with pytest.raises(ValueError):
            FileCache(cache_dir=tmp_path).lookup(key)


@pytest.mark.cache
class TestStore:
    """Tests for store() method."""

    def test_store_then_lookup_returns_entity(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)

        cache.store("1", widget)

        assert cache.lookup("1") == widget

    def test_store_preserves_identity_type(self, tmp_path: Path) -> None:
        cache = FileCache(cache_dir=tmp_path)

        cache.store("7", Entity(id=7))
        cache.store("sku", Entity(id="sku"))

        assert cache.lookup("7").id == 7
        assert cache.lookup("sku").id == "sku"

    def test_store_writes_json_and_sidecar(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)

        cache.store("1", widget)

        assert json.loads((tmp_path / "1.json").read_text()) == {"id": 1, "name": "Widget"}
        meta = json.loads((tmp_path / "1.meta.json").read_text())
        assert datetime.fromisoformat(meta["cached_at"]).tzinfo is not None

    def test_store_creates_cache_directory(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path / "nested" / "cache")

        cache.store("1", widget)

        assert cache.lookup("1") == widget

    def test_cached_at(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        assert cache.cached_at("1") is None

        cache.store("1", widget)

        assert isinstance(cache.cached_at("1"), datetime)

    def test_cached_at_corrupt_sidecar_raises(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("1", widget)
        (tmp_path / "1.meta.json").write_text("{}")

        with pytest.raises(CacheCorruptError):
            cache.cached_at("1")

    def test_failed_store_keeps_previous_entry(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("1", widget)

        with pytest.raises(TypeError):
            cache.store("1", Entity(id=1, attributes={"handle": object()}))

        assert cache.lookup("1") == widget
        assert list(tmp_path.glob("*.tmp")) == []

    def test_failed_first_store_leaves_a_miss(self, tmp_path: Path) -> None:
        cache = FileCache(cache_dir=tmp_path)

        with pytest.raises(TypeError):
            cache.store("1", Entity(id=1, attributes={"handle": object()}))

        assert cache.lookup("1") is None
        assert cache.list_all_keys() == []


@pytest.mark.cache
class TestMaintenance:
    """Tests for invalidate(), clear(), list_all_keys(), statistics()."""

    def test_invalidate_removes_entry_and_metadata(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("1", widget)

        cache.invalidate("1")

        assert cache.lookup("1") is None
        assert not (tmp_path / "1.json").exists()
        assert not (tmp_path / "1.meta.json").exists()

    def test_invalidate_nonexistent_key_does_not_raise(self, tmp_path: Path) -> None:
        FileCache(cache_dir=tmp_path).invalidate("never_existed")

    def test_list_all_keys(self, tmp_path: Path) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("b", Entity(id="b"))
        cache.store("a", Entity(id="a"))
        cache.store("p:1", Entity(id=1))

        assert cache.list_all_keys() == ["a", "b", "p:1"]

    def test_list_all_keys_without_directory(self, tmp_path: Path) -> None:
        assert FileCache(cache_dir=tmp_path / "absent").list_all_keys() == []

    def test_clear_removes_everything(self, tmp_path: Path) -> None:
        cache = FileCache(cache_dir=tmp_path)
        cache.store("1", Entity(id=1))
        cache.store("2", Entity(id=2))

        assert cache.clear() == 2
        assert list(tmp_path.iterdir()) == []

    def test_statistics(self, tmp_path: Path, widget) -> None:
        cache = FileCache(cache_dir=tmp_path)
        assert cache.statistics()["entry_count"] == 0

        cache.store("1", widget)
        stats = cache.statistics()

        expected = sum(p.stat().st_size for p in tmp_path.iterdir())
        assert stats == {"total_size": expected, "entry_count": 1}

    def test_statistics_without_directory(self, tmp_path: Path) -> None:
        cache = FileCache(cache_dir=tmp_path / "absent")
        assert cache.statistics() == {"total_size": 0, "entry_count": 0}
