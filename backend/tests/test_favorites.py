"""
Tests for the favorites store.
"""
import json
import threading
from unittest.mock import MagicMock

from domain.models import Place
from services.favorites import FavoritesStore, decode_places, encode_places


def _place(name: str, x: str = "126.978", y: str = "37.5665", **extra) -> Place:
    return Place(place_name=name, road_address_name="Seoul", distance="100", x=x, y=y, **extra)


class TestFavoritesStore:
    """Behavior against a real SQLite-backed key-value store."""

    def test_starts_empty_when_nothing_saved(self, kv_store, caplog):
        caplog.set_level("INFO")
        store = FavoritesStore(kv_store)
        assert store.all() == []
        assert "No saved favorites" in caplog.text

    def test_add_same_name_twice_keeps_first(self, kv_store):
        store = FavoritesStore(kv_store)
        first = _place("Cafe A", x="1.0", y="2.0")
        second = _place("Cafe A", x="3.0", y="4.0")

        store.add(first)
        store.add(second)

        assert len(store.all()) == 1
        assert store.all()[0].x == "1.0"

    def test_add_remove_contains(self, kv_store):
        store = FavoritesStore(kv_store)
        place = _place("Gyeongbokgung")

        store.add(place)
        assert store.contains(place)
        store.remove(place)
        assert not store.contains(place)

    def test_contains_matches_by_name_only(self, kv_store):
        store = FavoritesStore(kv_store)
        store.add(_place("Namsan Tower", x="1", y="1"))
        assert store.contains(_place("Namsan Tower", x="9", y="9"))

    def test_remove_missing_name_is_noop(self, kv_store):
        store = FavoritesStore(kv_store)
        store.add(_place("A"))
        store.add(_place("B"))

        store.remove(_place("Z"))

        assert [p.place_name for p in store.all()] == ["A", "B"]

    def test_round_trip_preserves_order(self, kv_store):
        store = FavoritesStore(kv_store)
        saved = [
            _place("First", phone="02-123-4567"),
            _place("Second", place_url="https://place.map.kakao.com/1"),
            _place("Third"),
        ]
        for p in saved:
            store.add(p)

        reloaded = FavoritesStore(kv_store)

        assert reloaded.all() == saved
        # ids are local only and regenerated on load
        assert {p.id for p in reloaded.all()}.isdisjoint({p.id for p in saved})

    def test_every_mutation_rewrites_full_list(self, kv_store):
        store = FavoritesStore(kv_store)
        store.add(_place("A"))
        store.add(_place("B"))
        store.remove(_place("A"))

        payload = json.loads(kv_store.get("favorites").decode("utf-8"))
        assert [item["place_name"] for item in payload] == ["B"]
        assert "id" not in payload[0]

    def test_custom_key(self, kv_store):
        store = FavoritesStore(kv_store, key="favorites_v2")
        store.add(_place("A"))
        assert kv_store.get("favorites") is None
        assert kv_store.get("favorites_v2") is not None

    def test_undecodable_value_starts_empty(self, kv_store, caplog):
        kv_store.set("favorites", b"\xff\xfe not json")
        store = FavoritesStore(kv_store)
        assert store.all() == []
        assert "could not be decoded" in caplog.text

    def test_wrong_shape_starts_empty(self, kv_store):
        kv_store.set("favorites", json.dumps({"place_name": "A"}).encode("utf-8"))
        assert FavoritesStore(kv_store).all() == []

        kv_store.set("favorites", json.dumps([{"place_name": "A"}]).encode("utf-8"))
        assert FavoritesStore(kv_store).all() == []

    def test_toggle(self, kv_store):
        store = FavoritesStore(kv_store)
        place = _place("Toggle Me")

        assert store.toggle(place) is True
        assert store.contains(place)
        assert store.toggle(place) is False
        assert not store.contains(place)

    def test_subscribers_see_each_mutation(self, kv_store):
        store = FavoritesStore(kv_store)
        seen = []
        store.favorites.subscribe(lambda places: seen.append([p.place_name for p in places]))

        store.add(_place("A"))
        store.add(_place("A"))
        store.add(_place("B"))
        store.remove(_place("A"))

        assert seen == [["A"], ["A", "B"], ["B"]]
        assert [p.place_name for p in store.favorites.value] == ["B"]

    def test_concurrent_adds_are_not_lost(self, kv_store):
        store = FavoritesStore(kv_store)
        names = [f"Place {i}" for i in range(20)]
        threads = [threading.Thread(target=store.add, args=(_place(n),)) for n in names]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert sorted(p.place_name for p in store.all()) == sorted(names)
        assert store.favorites.value == store.all()
        assert len(FavoritesStore(kv_store).all()) == len(names)

    def test_published_snapshots_match_store_under_concurrency(self, kv_store):
        store = FavoritesStore(kv_store)
        mismatches = []

        def check(places):
            if [p.place_name for p in places] != [p.place_name for p in store.all()]:
                mismatches.append(places)

        store.favorites.subscribe(check)
        threads = []
        for i in range(10):
            threads.append(threading.Thread(target=store.add, args=(_place(f"P{i}"),)))
            threads.append(threading.Thread(target=store.remove, args=(_place(f"P{i - 1}"),)))
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert mismatches == []
        assert store.favorites.value == store.all()

    def test_subscriber_may_mutate_store(self, kv_store):
        store = FavoritesStore(kv_store)

        def drop_banned(places):
            for p in places:
                if p.place_name == "Banned":
                    store.remove(p)

        store.favorites.subscribe(drop_banned)
        store.add(_place("Banned"))

        assert store.all() == []
        assert store.favorites.value == []


class TestFavoritesStoreFailures:
    """Storage failures are logged and never raised."""

    def test_read_failure_starts_empty(self, caplog):
        storage = MagicMock()
        storage.get.side_effect = OSError("disk gone")
        store = FavoritesStore(storage)
        assert store.all() == []
        assert "Reading favorites" in caplog.text

    def test_write_failure_keeps_memory_state(self, caplog):
        storage = MagicMock()
        storage.get.return_value = None
        storage.set.side_effect = OSError("read-only filesystem")
        store = FavoritesStore(storage)

        store.add(_place("Kept In Memory"))

        assert [p.place_name for p in store.all()] == ["Kept In Memory"]
        assert "storage is now stale" in caplog.text


def test_encode_decode_places_keeps_optional_fields():
    places = [_place("A", phone=None, place_url="https://example.com/a")]
    decoded = decode_places(encode_places(places))
    assert decoded == places
    assert decoded[0].phone is None
