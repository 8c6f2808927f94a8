from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone

import pytest

from linktrack.db import repository
from linktrack.db.models import Visit
from linktrack.services.errors import LinkNotFound, StorageUnavailable
from linktrack.services.visits import filter_visits

IPHONE = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"
WINDOWS = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"


def _visit(year, month, day, hour, minute):
    return Visit(
        timestamp=datetime(year, month, day, hour, minute, tzinfo=timezone.utc),
        user_agent=WINDOWS,
        device_type="desktop",
    )


FIRST = _visit(2024, 1, 1, 10, 0)
SECOND = _visit(2024, 1, 5, 23, 59)
THIRD = _visit(2024, 1, 10, 0, 1)


@pytest.fixture
def link(registry):
    return registry.create("https://example.com/landing")


@pytest.fixture
def seeded_link(link, store):
    # Appended out of chronological order on purpose
    for visit in (SECOND, THIRD, FIRST):
        repository.append_visit(store, link.id, visit)
    return link


def test_record_visit_returns_url_and_counts(recorder, registry, store, link):
    url = recorder.record_visit(link.id, IPHONE)

    assert url == "https://example.com/landing"
    assert registry.get(link.id).visit_count == 1
    entries = store.client.lrange(f"visits:{link.id}", 0, -1)
    assert len(entries) == 1
    visit = Visit.from_json(entries[0])
    assert visit.user_agent == IPHONE
    assert visit.device_type == "mobile"


def test_record_visit_without_user_agent(recorder, link):
    recorder.record_visit(link.id, None)
    [visit] = recorder.load_visits(link.id)
    assert visit.user_agent == ""
    assert visit.device_type == "desktop"


def test_record_visit_unknown_link_has_no_side_effects(recorder, store):
    with pytest.raises(LinkNotFound):
        recorder.record_visit("missing", IPHONE)
    assert store.client.keys("*") == []


def test_concurrent_visits_are_not_lost(recorder, registry, link):
    n = 200
    user_agents = [IPHONE if i % 2 else WINDOWS for i in range(n)]
    with ThreadPoolExecutor(max_workers=16) as pool:
        urls = list(pool.map(lambda ua: recorder.record_visit(link.id, ua), user_agents))

    assert urls == ["https://example.com/landing"] * n
    assert registry.get(link.id).visit_count == n
    visits = recorder.load_visits(link.id)
    assert len(visits) == n
    assert sum(v.device_type == "mobile" for v in visits) == n // 2


def test_stats_without_bounds_returns_everything_newest_first(recorder, seeded_link):
    stats = recorder.stats(seeded_link.id)
    assert stats.visits == [THIRD, SECOND, FIRST]
    assert stats.link.visit_count == 3
    assert stats.link.created_at == seeded_link.created_at


def test_stats_start_and_end_are_inclusive_days(recorder, seeded_link):
    stats = recorder.stats(seeded_link.id, start=date(2024, 1, 2), end=date(2024, 1, 5))
    assert stats.visits == [SECOND]
    # Summary keeps the unfiltered total
    assert stats.link.visit_count == 3


def test_stats_end_only(recorder, seeded_link):
    stats = recorder.stats(seeded_link.id, end=date(2024, 1, 5))
    assert stats.visits == [SECOND, FIRST]


def test_stats_start_only(recorder, seeded_link):
    stats = recorder.stats(seeded_link.id, start=date(2024, 1, 5))
    assert stats.visits == [THIRD, SECOND]


def test_stats_unknown_link(recorder, store):
    with pytest.raises(LinkNotFound):
        recorder.stats("missing")
    assert store.client.keys("*") == []


def test_stats_skips_corrupt_entries(recorder, store, seeded_link):
    key = repository.visits_key(seeded_link.id)
    store.client.rpush(key, "{not json")
    store.client.rpush(key, '{"timestamp": "garbage", "deviceType": "mobile"}')

    stats = recorder.stats(seeded_link.id)
    assert stats.visits == [THIRD, SECOND, FIRST]


def test_stats_storage_outage(recorder, seeded_link, redis_server):
    redis_server.connected = False
    with pytest.raises(StorageUnavailable):
        recorder.stats(seeded_link.id)


def test_filter_visits_day_boundaries():
    midnight_after = _visit(2024, 1, 6, 0, 0)
    last_instant = Visit(
        timestamp=datetime(2024, 1, 5, 23, 59, 59, 999000, tzinfo=timezone.utc),
        user_agent="",
        device_type="desktop",
    )
    start_instant = _visit(2024, 1, 2, 0, 0)
    kept = filter_visits(
        [midnight_after, last_instant, start_instant, FIRST],
        start=date(2024, 1, 2),
        end=date(2024, 1, 5),
    )
    assert kept == [last_instant, start_instant]


def test_filter_visits_empty():
    assert filter_visits([], start=date(2024, 1, 1)) == []


def test_filter_visits_last_representable_end_date():
    assert filter_visits([THIRD, FIRST], end=date.max) == [THIRD, FIRST]
    assert filter_visits([THIRD, FIRST], start=date(2024, 1, 2), end=date.max) == [THIRD]


def test_stats_last_representable_end_date(recorder, seeded_link):
    stats = recorder.stats(seeded_link.id, end=date(9999, 12, 31))
    assert stats.visits == [THIRD, SECOND, FIRST]
