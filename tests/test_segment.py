import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from geopoly_filter import (
    FieldDataCache,
    FixedBitSet,
    InMemoryGeoPointFieldData,
    SegmentReader,
    UnknownFieldError,
)


def test_reader_validation(single_valued_field):
    with pytest.raises(ValueError, match="segment_id"):
        SegmentReader(segment_id="", max_doc=5)
    with pytest.raises(ValueError, match="max_doc"):
        SegmentReader(segment_id="s", max_doc=-1)
    with pytest.raises(ValueError, match="live_docs"):
        SegmentReader(segment_id="s", max_doc=5, live_docs=FixedBitSet.all(4))


def test_reader_is_frozen(reader):
    with pytest.raises(AttributeError):
        reader.max_doc = 10


def test_reader_copies_field_mapping(single_valued_field):
    fields = {"location": single_valued_field}
    reader = SegmentReader(segment_id="s", max_doc=5, fields=fields)
    fields["other"] = single_valued_field
    with pytest.raises(UnknownFieldError):
        reader.field_data("other")


def test_unknown_field_message(reader):
    with pytest.raises(UnknownFieldError) as exc_info:
        reader.field_data("missing")
    assert isinstance(exc_info.value, KeyError)
    assert "seg-0" in str(exc_info.value)
    assert "['location']" in str(exc_info.value)


def test_cache_hit_and_miss(reader, single_valued_field):
    cache = FieldDataCache()
    assert cache.load(reader, "location") is single_valued_field
    assert cache.load(reader, "location") is single_valued_field
    assert (cache.hits, cache.misses) == (1, 1)
    assert ("seg-0", "location") in cache
    assert len(cache) == 1


def test_cache_unknown_field_not_stored(reader):
    cache = FieldDataCache()
    with pytest.raises(UnknownFieldError):
        cache.load(reader, "missing")
    assert len(cache) == 0


def test_evict_only_drops_one_segment(reader, reader_with_deletes):
    cache = FieldDataCache()
    cache.load(reader, "location")
    cache.load(reader_with_deletes, "location")

    assert cache.evict("seg-0") == 1
    assert ("seg-0", "location") not in cache
    assert ("seg-1", "location") in cache
    assert cache.evict("seg-0") == 0

    cache.clear()
    assert len(cache) == 0


def test_custom_loader(reader):
    built = InMemoryGeoPointFieldData.from_documents([(1, 1)] * 5)
    calls = []

    def loader(segment, field_name):
        calls.append((segment.segment_id, field_name))
        return built

    cache = FieldDataCache(loader=loader)
    assert cache.load(reader, "anything") is built
    assert cache.load(reader, "anything") is built
    assert calls == [("seg-0", "anything")]


def test_concurrent_loads_share_one_copy(reader):
    gate = threading.Barrier(8)

    def loader(segment, field_name):
        gate.wait(timeout=5)
        return InMemoryGeoPointFieldData.from_documents([(1, 1)] * 5)

    cache = FieldDataCache(loader=loader)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.load(reader, "location"), range(8)))

    assert len({id(r) for r in results}) == 1
    assert len(cache) == 1


def test_counters_consistent_under_concurrent_loads(reader, reader_with_deletes):
    cache = FieldDataCache()
    readers = [reader, reader_with_deletes] * 100

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda r: cache.load(r, "location"), readers))

    assert cache.hits + cache.misses == len(readers)
    assert cache.misses >= 2
    assert repr(cache) == (
        f"FieldDataCache(entries=2, hits={cache.hits}, misses={cache.misses})"
    )
