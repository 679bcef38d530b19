import asyncio

import httpx

from fusion_recipes.db.profiles import get_profile
from fusion_recipes.main import app


def test_unknown_profile_reads_as_empty_defaults() -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/profiles/nobody")
        assert resp.status_code == 200
        assert resp.json() == {
            "medical_health_preferences": [],
            "lifestyle_dietary_preferences": [],
            "religious_preferences": [],
            "pantry_items": [],
        }

    asyncio.run(run())


def test_put_profile_then_update_overwrites() -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            first = await client.put(
                "/profiles/user-1",
                json={"lifestyle_dietary_preferences": ["Vegan"], "pantry_items": ["rice"]},
            )
            second = await client.put(
                "/profiles/user-1", json={"religious_preferences": ["Halal"]}
            )
            read = await client.get("/profiles/user-1")
        assert first.status_code == 200
        assert second.status_code == 200
        assert read.json()["religious_preferences"] == ["Halal"]
        assert read.json()["lifestyle_dietary_preferences"] == []

    asyncio.run(run())

    stored = get_profile("user-1")
    assert stored is not None
    assert stored.religious_preferences == ["Halal"]


def test_put_profile_rejects_unknown_fields() -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.put("/profiles/user-1", json={"dark_mode": True})
        assert resp.status_code == 422

    asyncio.run(run())
