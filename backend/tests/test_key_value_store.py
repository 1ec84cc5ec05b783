from storage.key_value import KeyValueStore


def test_missing_key_returns_none(kv_store):
    assert kv_store.get("favorites") is None


def test_set_overwrites_whole_value(kv_store):
    kv_store.set("favorites", b"[1, 2, 3]")
    kv_store.set("favorites", b"[]")
    assert kv_store.get("favorites") == b"[]"


def test_delete(kv_store):
    kv_store.set("k", b"v")
    kv_store.delete("k")
    kv_store.delete("never-set")
    assert kv_store.get("k") is None


def test_values_survive_new_store_instance(tmp_path):
    db_path = str(tmp_path / "nested" / "kv.sqlite")
    KeyValueStore(db_path=db_path).set("favorites", "즐겨찾기".encode("utf-8"))

    assert KeyValueStore(db_path=db_path).get("favorites").decode("utf-8") == "즐겨찾기"
