import json

from speedboard.cache import CacheEntry, JsonFileBacking, LocalCache
from tests.fakes import BrokenBacking


def test_get_missing_entry(cache):
    assert cache.get("ava", 30) is None


def test_set_then_get(cache, backing):
    cache.set("ava", 30, CacheEntry(best_score=51.5, record_id=4))

    assert cache.get("ava", 30) == CacheEntry(best_score=51.5, record_id=4)
    assert backing["best_score_ava_30"] == "51.5"
    assert backing["record_id_ava_30"] == "4"


def test_score_without_record_id(cache):
    cache.set("ava", 15, CacheEntry(best_score=10))

    assert cache.get("ava", 15) == CacheEntry(best_score=10, record_id=None)


def test_corrupt_record_id_keeps_score(cache, backing):
    backing["best_score_ava_30"] = "12"
    backing["record_id_ava_30"] = "abc"

    assert cache.get("ava", 30) == CacheEntry(best_score=12, record_id=None)


def test_non_finite_score_is_absent(cache, backing):
    backing["best_score_ava_30"] = "nan"

    assert cache.get("ava", 30) is None


def test_clear_removes_every_mode_for_one_player_only(cache, backing):
    for mode in (15, 30, 60):
        cache.set("ava", mode, CacheEntry(best_score=mode, record_id=mode))
    cache.set("ava_1", 30, CacheEntry(best_score=1, record_id=1))
    cache.set_display_name("ava")

    cache.clear("ava")

    assert all(cache.get("ava", mode) is None for mode in (15, 30, 60))
    assert cache.get("ava_1", 30) == CacheEntry(best_score=1, record_id=1)
    assert cache.get_display_name() == "ava"


def test_broken_backing_never_raises():
    cache = LocalCache(BrokenBacking())

    cache.set("ava", 30, CacheEntry(best_score=1, record_id=1))
    cache.clear("ava")
    cache.set_display_name("ava")

    assert cache.get("ava", 30) is None
    assert cache.get_display_name() is None
    assert cache.profile("ava")["hasProfile"] is False


def test_profile_picks_best_mode(cache):
    cache.set("ava", 15, CacheEntry(best_score=40))
    cache.set("ava", 60, CacheEntry(best_score=75))
    cache.set("ava", 30, CacheEntry(best_score=60))

    assert cache.profile("ava") == {
        "name": "ava",
        "bestScore": 75,
        "bestGameMode": 60,
        "hasProfile": True,
    }


def test_profile_without_scores(cache):
    assert cache.profile("nobody") == {
        "name": "nobody",
        "bestScore": None,
        "bestGameMode": None,
        "hasProfile": False,
    }


def test_json_file_backing_survives_new_instance(tmp_path):
    path = tmp_path / "cache" / "local.json"
    LocalCache(JsonFileBacking(path)).set("ava", 30, CacheEntry(best_score=9, record_id=2))

    reopened = LocalCache(JsonFileBacking(path))

    assert reopened.get("ava", 30) == CacheEntry(best_score=9, record_id=2)
    assert json.loads(path.read_text(encoding="utf-8"))["record_id_ava_30"] == "2"


def test_json_file_backing_external_delete_is_absent(tmp_path):
    path = tmp_path / "local.json"
    cache = LocalCache(JsonFileBacking(path))
    cache.set("ava", 30, CacheEntry(best_score=9))

    path.unlink()

    assert cache.get("ava", 30) is None


def test_json_file_backing_garbage_degrades_to_absent(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("{not json", encoding="utf-8")
    cache = LocalCache(JsonFileBacking(path))

    assert cache.get("ava", 30) is None
    cache.set("ava", 30, CacheEntry(best_score=3))
    assert path.read_text(encoding="utf-8") == "{not json"
