"""Tests that the server handles multiple concurrent connections correctly.

The app is async (FastAPI + a shared store handle) and can be run with
multiple uvicorn workers. These tests assert that many simultaneous requests
succeed, never hand out the same key twice, and count every redirect.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_ping_requests(self, client):
        """Many concurrent GET /ping requests all succeed."""
        concurrency = 50
        tasks = [client.get("/ping") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            assert not isinstance(r, Exception), f"Request {i} raised: {r}"
            assert r.status_code == 200, f"Request {i} got status {r.status_code}"

    async def test_concurrent_creates_get_unique_keys(self, client):
        """Concurrent POST /manage/ requests each get their own key."""
        concurrency = 30
        tasks = [
            client.post("/manage/", json={"url": f"https://example.com/concurrent/{i}"})
            for i in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        keys = []
        for i, r in enumerate(responses):
            assert not isinstance(r, Exception), f"Request {i} raised: {r}"
            assert r.status_code == 201, f"Request {i} got status {r.status_code}"
            keys.append(r.json()["short_url"].rsplit("/g/", 1)[-1])

        assert len(set(keys)) == concurrency

        listed = (await client.get("/manage/")).json()["urls"]
        assert len(listed) == concurrency

    async def test_concurrent_redirects_are_all_counted(self, client):
        """N concurrent redirects raise the count by exactly N."""
        created = await client.post("/manage/", json={"url": "https://example.com/hot"})
        key = created.json()["short_url"].rsplit("/g/", 1)[-1]

        concurrency = 40
        tasks = [client.get(f"/g/{key}", follow_redirects=False) for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            assert not isinstance(r, Exception), f"Request {i} raised: {r}"
            assert r.status_code == 302, f"Request {i} got status {r.status_code}"
            assert r.headers["location"] == "https://example.com/hot"

        (item,) = (await client.get("/manage/")).json()["urls"]
        assert item["redirect_count"] == concurrency

    async def test_concurrent_mixed_requests(self, client):
        """Creates, reads, lists and deletes interleave without errors."""
        seeded = []
        for i in range(5):
            r = await client.post("/manage/", json={"url": f"https://example.com/seed/{i}"})
            seeded.append(r.json()["short_url"].rsplit("/g/", 1)[-1])

        tasks = []
        for i in range(10):
            tasks.append(client.post("/manage/", json={"url": f"https://example.com/mixed/{i}"}))
            tasks.append(client.get(f"/g/{seeded[i % 5]}", follow_redirects=False))
            tasks.append(client.get("/manage/"))
        tasks.append(client.delete(f"/manage/{seeded[0]}"))

        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            assert not isinstance(r, Exception), f"Request {i} raised: {r}"
            assert r.status_code in (200, 201, 302, 404), f"Request {i} got status {r.status_code}"
