import threading

from tengwar.cache import TranscriptionCache


def test_get_set_and_stats() -> None:
    cache = TranscriptionCache()

    assert cache.get("cake") is None
    cache.set("cake", "zzEÉ")
    assert cache.get("cake") == "zzEÉ"
    assert len(cache) == 1
    assert cache.stats() == {"size": 1, "hits": 1, "misses": 1}


def test_clear_resets_entries_and_counters() -> None:
    cache = TranscriptionCache()
    cache.set("know", "5yY")
    cache.get("know")

    cache.clear()

    assert "know" not in cache
    assert cache.stats() == {"size": 0, "hits": 0, "misses": 0}


def test_concurrent_writers_do_not_corrupt_entries() -> None:
    cache = TranscriptionCache()

    def writer(offset: int) -> None:
        for i in range(200):
            cache.set(f"w{i}", f"v{i}")
            cache.get(f"w{(i + offset) % 200}")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 200
    assert all(cache.get(f"w{i}") == f"v{i}" for i in range(200))
    stats = cache.stats()
    assert stats["hits"] + stats["misses"] == 8 * 200 + 200
