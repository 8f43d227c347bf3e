"""Tests for the file-backed local store."""

from cricket_pro.sync.local_store import BACKUP_KEY, SELECTED_TAB_KEY, LocalStore


class TestLocalStore:
    def test_missing_key(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")

        assert store.get_item(BACKUP_KEY) is None

    def test_set_and_get(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")

        store.set_item(SELECTED_TAB_KEY, "matches")

        assert store.get_item(SELECTED_TAB_KEY) == "matches"

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        LocalStore(path).set_item(SELECTED_TAB_KEY, "teams")

        assert LocalStore(path).get_item(SELECTED_TAB_KEY) == "teams"

    def test_remove_item(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")
        store.set_item(SELECTED_TAB_KEY, "teams")

        store.remove_item(SELECTED_TAB_KEY)
        store.remove_item("never-set")

        assert store.get_item(SELECTED_TAB_KEY) is None

    def test_clear_and_keys(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")
        store.set_item("a", "1")
        store.set_item("b", "2")

        assert sorted(store.keys()) == ["a", "b"]
        store.clear()
        assert store.keys() == []

    def test_usage_bytes(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")
        store.set_item("ab", "cde")

        assert store.usage_bytes() == 5

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{oops")

        assert LocalStore(path).get_item(BACKUP_KEY) is None
