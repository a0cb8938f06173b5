import pytest

from catalog.core.errors import BadRequestError, ConflictError, NotFoundError
from catalog.schemas.property import PropertyCreate, PropertyUpdate
from catalog.services.properties import PropertyReconciler, PropertyService
from factories import make_property


@pytest.fixture
def reconciler(property_store):
    return PropertyReconciler(property_store)


@pytest.mark.asyncio
async def test_reconcile_is_idempotent(reconciler, property_store):
    definitions = [make_property(), make_property("plan", "string", "Plan name"), make_property("paid", "boolean", "Paid")]

    first = await reconciler.reconcile(definitions)
    second = await reconciler.reconcile(definitions)

    assert first == second
    assert len(first) == 3
    assert len(await property_store.list_active()) == 3


@pytest.mark.asyncio
async def test_repeated_definitions_share_one_record(reconciler, property_store):
    ids = await reconciler.reconcile([make_property(), make_property()])

    assert ids[0] == ids[1]
    assert len(await property_store.list_active()) == 1


@pytest.mark.asyncio
async def test_output_follows_input_order(reconciler):
    a, b = make_property("a", "string", "A"), make_property("b", "number", "B")

    forward = await reconciler.reconcile([a, b])
    backward = await reconciler.reconcile([b, a])

    assert backward == list(reversed(forward))


@pytest.mark.asyncio
async def test_missing_field_names_the_event(reconciler):
    with pytest.raises(BadRequestError) as exc_info:
        await reconciler.reconcile([PropertyCreate(name="user_id", type="string")], event_name="signup")

    assert exc_info.value.message == "Property name, type, and description are required for event 'signup'"


@pytest.mark.asyncio
async def test_invalid_type_is_rejected(reconciler):
    with pytest.raises(BadRequestError) as exc_info:
        await reconciler.reconcile([make_property(type="date")])

    assert "Invalid property type 'date'" in exc_info.value.message


@pytest.mark.asyncio
async def test_validation_happens_before_any_write(reconciler, property_store):
    with pytest.raises(BadRequestError):
        await reconciler.reconcile([make_property(), make_property("broken", "string", "")])

    assert await property_store.list_active() == []


@pytest.mark.asyncio
async def test_conflict_propagates(reconciler):
    await reconciler.reconcile([make_property()])

    with pytest.raises(ConflictError) as exc_info:
        await reconciler.reconcile([make_property(description="Another meaning")])

    assert exc_info.value.message == (
        "Property 'user_id' of type 'string' already exists with a different description"
    )


@pytest.mark.asyncio
async def test_direct_create_conflicts_on_existing_identity(db):
    service = PropertyService(db)
    await service.create_property(make_property())

    with pytest.raises(ConflictError):
        await service.create_property(make_property(description="Another meaning"))
    with pytest.raises(ConflictError):
        await service.create_property(make_property())


@pytest.mark.asyncio
async def test_update_changes_description_only(db):
    service = PropertyService(db)
    created = await service.create_property(make_property())

    updated = await service.update_property(created.id, PropertyUpdate(description="Account ID"))

    assert updated.description == "Account ID"
    assert (updated.name, updated.type) == ("user_id", "string")

    with pytest.raises(BadRequestError):
        await service.update_property(created.id, PropertyUpdate(description="   "))


@pytest.mark.asyncio
async def test_deleted_property_is_hidden(db):
    service = PropertyService(db)
    created = await service.create_property(make_property())

    await service.delete_property(created.id)

    assert await service.list_properties() == []
    with pytest.raises(NotFoundError):
        await service.get_property(created.id)


@pytest.mark.asyncio
async def test_list_returns_newest_property_first(db):
    service = PropertyService(db)
    await service.create_property(make_property("user_id"))
    await service.create_property(make_property("plan"))

    assert [p.name for p in await service.list_properties()] == ["plan", "user_id"]
