import pytest
from uuid import uuid4

from catalog.core.errors import ConflictError
from catalog.services.identity import IdentityResolver, merge_ids


@pytest.mark.asyncio
async def test_resolve_creates_missing_record(property_store):
    resolution = await IdentityResolver(property_store).resolve("user_id", "string", "User ID")

    assert resolution.was_created is True
    stored = await property_store.find_active_by_id(resolution.id)
    assert (stored.name, stored.type, stored.description) == ("user_id", "string", "User ID")


@pytest.mark.asyncio
async def test_resolve_reuses_record_with_same_description(property_store):
    resolver = IdentityResolver(property_store)
    first = await resolver.resolve("user_id", "string", "User ID")
    second = await resolver.resolve("user_id", "string", "User ID")

    assert second.id == first.id
    assert second.was_created is False
    assert len(await property_store.list_active()) == 1


@pytest.mark.asyncio
async def test_resolve_conflicts_on_different_description(property_store):
    resolver = IdentityResolver(property_store)
    await resolver.resolve("user_id", "string", "User ID")

    with pytest.raises(ConflictError) as exc_info:
        await resolver.resolve("user_id", "string", "Account ID")

    assert "already exists with a different description" in exc_info.value.message
    assert "'user_id'" in exc_info.value.message


@pytest.mark.asyncio
async def test_same_name_with_other_type_is_a_different_identity(property_store):
    resolver = IdentityResolver(property_store)
    as_string = await resolver.resolve("age", "string", "Age as text")
    as_number = await resolver.resolve("age", "number", "Age in years")

    assert as_string.id != as_number.id
    assert as_number.was_created is True


@pytest.mark.asyncio
async def test_deleted_record_is_not_resurrected(property_store):
    resolver = IdentityResolver(property_store)
    original = await resolver.resolve("user_id", "string", "User ID")
    await property_store.soft_delete(original.id)

    # A different description is fine once the old record is tombstoned
    replacement = await resolver.resolve("user_id", "string", "Account ID")

    assert replacement.was_created is True
    assert replacement.id != original.id
    assert (await property_store.find_by_id(original.id)).is_deleted


@pytest.mark.asyncio
async def test_prepare_runs_only_when_creating(event_store):
    resolver = IdentityResolver(event_store)
    property_id = uuid4()
    calls = []

    async def prepare():
        calls.append(True)
        return {"property_ids": [property_id]}

    created = await resolver.resolve("signup", "track", "d", prepare=prepare)
    reused = await resolver.resolve("signup", "track", "d", prepare=prepare)

    assert created.was_created and not reused.was_created
    assert len(calls) == 1
    event = await event_store.find_by_id(created.id)
    assert event.property_ids == [str(property_id)]


@pytest.mark.asyncio
async def test_lost_creation_race_surfaces_as_conflict(property_store, monkeypatch):
    await IdentityResolver(property_store).resolve("user_id", "string", "User ID")

    # Simulate a concurrent resolver that looked before the first insert committed
    async def stale_lookup(name, type_):
        return None

    monkeypatch.setattr(property_store, "find_active_by_identity", stale_lookup)

    with pytest.raises(ConflictError):
        await IdentityResolver(property_store).resolve("user_id", "string", "User ID")

    assert len(await property_store.list_active()) == 1


def test_merge_ids_keeps_first_seen_order():
    a, b, c = uuid4(), uuid4(), uuid4()

    assert merge_ids([a, b], [c, a, b, c]) == [a, b, c]
    assert merge_ids([b, b]) == [b]
    assert merge_ids() == []
