from perfectfit.services.profile_store import KeyValueStore, ProfileStore


def test_key_value_store(tmp_path):
    kv = KeyValueStore(str(tmp_path / "nested" / "store.json"))
    assert kv.get("missing", "default") == "default"
    kv.set("a", {"b": 1})
    assert KeyValueStore(kv.path).get("a") == {"b": 1}
    kv.delete("a")
    assert kv.get("a") is None


def test_corrupt_store_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    assert KeyValueStore(str(path)).get("anything") is None


def test_profile_keeps_gender(tmp_path):
    store = ProfileStore(KeyValueStore(str(tmp_path / "store.json")))
    first = store.save_profile({"chest": 40.0}, gender="female")
    assert first["gender"] == "female"
    assert "timestamp" in first
    second = store.save_profile({"chest": 41.0})
    assert second["gender"] == "female"
    store.clear_profile()
    assert store.load_profile() is None
