# tests/test_concurrency.py
import asyncio
import httpx

from sdk.product_client import ProductClient


async def _create_many(app, api_key, n):
    client = ProductClient(base_url="http://test", api_key=api_key)
    transport = httpx.ASGITransport(app=app)
    return await asyncio.gather(*[
        client.create_product_async(f"Item {i}", "bulk", i, "bulk", True, transport=transport)
        for i in range(n)
    ])


def test_concurrent_creates_get_unique_ids(app, store, api_key):
    results = asyncio.run(_create_many(app, api_key, 20))
    assert all(r.status_code == 201 for r in results)
    ids = [r.json()["product"]["id"] for r in results]
    assert len(set(ids)) == 20
    assert len(store) == 25
    assert {p.id for p in store.list()} >= set(ids)


def test_concurrent_creates_without_key_leave_store_untouched(app, store):
    async def _run():
        client = ProductClient(base_url="http://test")
        transport = httpx.ASGITransport(app=app)
        return await asyncio.gather(*[
            client.create_product_async("X", "y", 1, "z", transport=transport) for _ in range(5)
        ])

    results = asyncio.run(_run())
    assert [r.status_code for r in results] == [401] * 5
    assert len(store) == 5
