import pytest

from catalog.services.importer import ImportService


def _plan(name, event_description="d", **overrides):
    payload = {
        "name": name,
        "description": f"{name} plan",
        "events": [{
            "name": "signup",
            "type": "track",
            "description": event_description,
            "properties": [{"name": "user_id", "type": "string", "description": "User ID"}],
        }],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_import_counts_each_outcome(db, plan_store, property_store):
    payloads = [
        _plan("onboarding"),
        _plan("retention"),
        _plan("onboarding"),
        _plan("activation", event_description="different"),
        _plan("empty", events=[]),
        _plan("malformed", events="not a list"),
    ]

    counts = await ImportService(db).import_tracking_plans(payloads)

    assert counts == {"created": 2, "conflicts": 2, "invalid": 2}
    assert {p.name for p in await plan_store.list_active()} == {"onboarding", "retention"}
    assert len(await property_store.list_active()) == 1


@pytest.mark.asyncio
async def test_import_nothing(db):
    assert await ImportService(db).import_tracking_plans([]) == {"created": 0, "conflicts": 0, "invalid": 0}
