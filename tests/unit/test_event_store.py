import pytest

from event_pages.services.assets import ProcessedAssets
from event_pages.services.normalizer import normalize_event_payload
from event_pages.services.records import build_event_record
from event_pages.services.store import EventConflictError, EventStore


def make_record(event_id, created_at=1735689600000, name="Conf"):
    event = normalize_event_payload({
        "eventName": name,
        "eventDate": "2025-01-01",
        "agenda": [{"title": "Opening", "time": "09:00", "day": 1}],
        "socialLinks": {"twitter": "https://twitter.test/conf"},
    })
    assets = ProcessedAssets.empty(event)
    assets.hero_image = f"https://assets.test/banners/{event_id}_banner.png"
    return build_event_record(event_id, event, assets, created_at)


def test_build_event_record_shape():
    record = make_record("evt-1")

    assert record["eventId"] == "evt-1"
    assert record["createdAt"] == record["updatedAt"] == 1735689600000
    assert record["status"] == "active"
    assert record["selectedTemplate"] == "1"
    assert record["heroImage"] == "https://assets.test/banners/evt-1_banner.png"
    assert record["eventLogo"] == ""
    assert record["primaryCTA"] == {"text": "Register Now", "link": "#contact"}
    assert record["agenda"][0]["type"] == "session"
    assert record["socialLinks"]["twitter"] == "https://twitter.test/conf"
    assert "assets" not in record


@pytest.mark.asyncio
async def test_create_and_get_round_trip(session_factory):
    record = make_record("evt-1")

    async with session_factory() as session:
        await EventStore(session).create(record)

    async with session_factory() as session:
        stored = await EventStore(session).get("evt-1")

    assert stored == record


@pytest.mark.asyncio
async def test_create_never_overwrites(session_factory):
    async with session_factory() as session:
        await EventStore(session).create(make_record("evt-1", name="Original"))

    async with session_factory() as session:
        with pytest.raises(EventConflictError):
            await EventStore(session).create(make_record("evt-1", name="Imposter"))

    async with session_factory() as session:
        stored = await EventStore(session).get("evt-1")

    assert stored["eventName"] == "Original"


@pytest.mark.asyncio
async def test_get_unknown_returns_none(session_factory):
    async with session_factory() as session:
        assert await EventStore(session).get("missing") is None


@pytest.mark.asyncio
async def test_list_all_newest_first(session_factory):
    async with session_factory() as session:
        store = EventStore(session)
        await store.create(make_record("old", created_at=1000))
        await store.create(make_record("new", created_at=2000))

    async with session_factory() as session:
        records = await EventStore(session).list_all()

    assert [r["eventId"] for r in records] == ["new", "old"]
