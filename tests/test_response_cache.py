import json

import pytest

from transcript_analyzer.semantic.response_cache import ResponseCache


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _request(text: str = "hello") -> dict:
    return {"url": "https://nlu.example.test/v1/analyze", "body": {"text": text}}


def test_cache_miss_then_hit(tmp_path) -> None:
    cache = ResponseCache(tmp_path, ttl_seconds=600, clock=_Clock())
    calls: list[int] = []

    def compute() -> dict:
        calls.append(1)
        return {"sentiment": {"document": {"label": "neutral", "score": 0.0}}}

    first = cache.get_or_compute(request=_request(), compute=compute)
    second = cache.get_or_compute(request=_request(), compute=compute)

    assert first.cache_hit is False
    assert second.cache_hit is True
    assert second.payload == first.payload
    assert len(calls) == 1
    assert first.cache_path.parent.name == first.cache_key[:2]
    assert json.loads(first.cache_path.read_text())["stored_at"] == 1000.0


def test_expired_entry_is_recomputed(tmp_path) -> None:
    clock = _Clock()
    cache = ResponseCache(tmp_path, ttl_seconds=60, clock=clock)
    cache.get_or_compute(request=_request(), compute=lambda: {"value": 1})

    clock.now += 60
    entry = cache.get_or_compute(request=_request(), compute=lambda: {"value": 2})

    assert entry.cache_hit is False
    assert entry.invalidated_stale_entry is True
    assert entry.payload == {"value": 2}


def test_zero_ttl_never_hits(tmp_path) -> None:
    cache = ResponseCache(tmp_path, ttl_seconds=0, clock=_Clock())
    cache.get_or_compute(request=_request(), compute=lambda: {"value": 1})

    entry = cache.get_or_compute(request=_request(), compute=lambda: {"value": 2})

    assert entry.cache_hit is False
    assert entry.payload == {"value": 2}


def test_corrupt_entry_is_replaced(tmp_path, caplog) -> None:
    cache = ResponseCache(tmp_path, ttl_seconds=600, clock=_Clock())
    entry = cache.get_or_compute(request=_request(), compute=lambda: {"value": 1})
    entry.cache_path.write_text("{not json", encoding="utf-8")

    recomputed = cache.get_or_compute(request=_request(), compute=lambda: {"value": 3})

    assert recomputed.cache_hit is False
    assert recomputed.invalidated_stale_entry is True
    assert recomputed.payload == {"value": 3}
    assert "Invalid response cache entry" in caplog.text


def test_fingerprint_ignores_key_order() -> None:
    left = ResponseCache.fingerprint({"a": 1, "b": {"c": 2, "d": 3}})
    right = ResponseCache.fingerprint({"b": {"d": 3, "c": 2}, "a": 1})

    assert left == right
    assert left != ResponseCache.fingerprint({"a": 2, "b": {"c": 2, "d": 3}})


def test_different_requests_use_different_entries(tmp_path) -> None:
    cache = ResponseCache(tmp_path, ttl_seconds=600, clock=_Clock())

    first = cache.get_or_compute(request=_request("a"), compute=lambda: {"value": 1})
    second = cache.get_or_compute(request=_request("b"), compute=lambda: {"value": 2})

    assert first.cache_key != second.cache_key
    assert second.payload == {"value": 2}


def test_negative_ttl_is_rejected(tmp_path) -> None:
    with pytest.raises(ValueError):
        ResponseCache(tmp_path, ttl_seconds=-1)


def test_write_leaves_no_temporary_files(tmp_path) -> None:
    cache = ResponseCache(tmp_path, ttl_seconds=600, clock=_Clock())

    entry = cache.get_or_compute(request=_request(), compute=lambda: {"value": 1})

    assert [path.name for path in entry.cache_path.parent.iterdir()] == [
        entry.cache_path.name
    ]
