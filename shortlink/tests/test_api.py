"""Tests for the HTTP endpoints."""

import re

import pytest

from config import Config
from lib.exceptions import KeyGenerationError, StorageError
from lib.keygen import KeyGenerator
from lib.service import MAX_EXPIRES_IN, ShortLinkService
from web_app import create_app
from httpx import ASGITransport, AsyncClient


SHORT_URL_PATTERN = re.compile(r"^testserver/g/([a-zA-Z0-9]{16})$")


class BrokenStore:
    """Store whose backend is down."""

    def __init__(self):
        self.calls = []

    async def get(self, key):
        self.calls.append(("get", key))
        raise StorageError("connection refused to db.internal:5432")

    async def put(self, key, target_url, expires_at=None):
        raise StorageError("connection refused to db.internal:5432")

    async def put_if_absent(self, key, target_url, expires_at=None):
        raise StorageError("connection refused to db.internal:5432")

    async def delete(self, key):
        raise StorageError("connection refused to db.internal:5432")

    async def list(self):
        raise StorageError("connection refused to db.internal:5432")

    async def close(self):
        pass


class FailingKeyGenerator(KeyGenerator):
    def generate(self) -> str:
        raise KeyGenerationError("secure random source unavailable")


async def make_client(store, logger, key_generator=None, config=None):
    service = ShortLinkService(store=store, key_generator=key_generator, logger=logger)
    app = create_app(
        store_instance=store,
        service_instance=service,
        config=config or Config(storage_backend="memory"),
        logger=logger,
    )
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


async def create(client, url, **extra):
    response = await client.post("/manage/", json={"url": url, **extra})
    assert response.status_code == 201, response.text
    match = SHORT_URL_PATTERN.match(response.json()["short_url"])
    assert match, response.json()
    return match.group(1)


@pytest.mark.asyncio
class TestPing:

    async def test_ping(self, client):
        response = await client.get("/ping")

        assert response.status_code == 200

    async def test_ping_head(self, client):
        response = await client.head("/ping")

        assert response.status_code == 200


@pytest.mark.asyncio
class TestCreateRedirect:
    """Test POST /manage/."""

    async def test_create(self, client, sample_urls):
        response = await client.post("/manage/", json={"url": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert list(data) == ["short_url"]
        assert SHORT_URL_PATTERN.match(data["short_url"])

    async def test_create_uses_request_host(self, client):
        response = await client.post(
            "/manage/",
            json={"url": "https://example.com"},
            headers={"Host": "sho.rt:8080"},
        )

        assert response.status_code == 201
        assert re.match(r"^sho\.rt:8080/g/[a-zA-Z0-9]{16}$", response.json()["short_url"])

    async def test_create_uses_configured_public_host(self, store, logger):
        config = Config(storage_backend="memory", public_host="go.example.org")
        async with await make_client(store, logger, config=config) as client:
            response = await client.post("/manage/", json={"url": "https://example.com"})

        assert response.status_code == 201
        assert response.json()["short_url"].startswith("go.example.org/g/")

    async def test_create_with_expires_in(self, client, store):
        key = await create(client, "https://example.com", expires_in=3600)

        link = await store.get(key)
        assert link.expires_at is not None

    @pytest.mark.parametrize("body, message", [
        ({"url": "not-a-url"}, "invalid url format"),
        ({"url": "ftp://x.com"}, "url must use http or https scheme"),
        ({"url": "http://"}, "url must have a valid host"),
        ({"url": ""}, "url is required"),
        ({}, "url is required"),
    ])
    async def test_create_invalid_url(self, client, store, body, message):
        response = await client.post("/manage/", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == message
        assert await store.list() == []

    @pytest.mark.parametrize("body", [
        {"url": 42},
        {"url": "https://example.com", "expires_in": 0},
        {"url": "https://example.com", "expires_in": -5},
        {"url": "https://example.com", "expires_in": 10**30},
        {"url": "https://example.com", "expires_in": MAX_EXPIRES_IN + 1},
        {"url": "https://example.com", "expires_in": "soon"},
        ["https://example.com"],
    ])
    async def test_create_invalid_body(self, client, body):
        response = await client.post("/manage/", json=body)

        assert response.status_code == 400
        assert response.json()["detail"]

    async def test_create_with_longest_expiry(self, client):
        await create(client, "https://example.com", expires_in=MAX_EXPIRES_IN)

    async def test_create_malformed_json(self, client):
        response = await client.post(
            "/manage/",
            content=b'{"url": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "invalid request body"

    async def test_create_missing_body(self, client):
        response = await client.post("/manage/")

        assert response.status_code == 400

    async def test_create_storage_error(self, logger):
        async with await make_client(BrokenStore(), logger) as client:
            response = await client.post("/manage/", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}
        assert "db.internal" not in response.text

    async def test_create_key_generation_error(self, store, logger):
        async with await make_client(store, logger, key_generator=FailingKeyGenerator()) as client:
            response = await client.post("/manage/", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}


@pytest.mark.asyncio
class TestRedirect:
    """Test GET /g/{key}."""

    async def test_redirect(self, client, sample_urls):
        for url in sample_urls:
            key = await create(client, url)

            response = await client.get(f"/g/{key}", follow_redirects=False)

            assert response.status_code == 302
            assert response.headers["location"] == url

    @pytest.mark.parametrize("url", [
        "https://example.com/search?q={x}",
        "https://example.com/a|b",
        "https://example.com/p^q",
        "https://example.com/path%20with%2Fescapes?x=1&y=\"2\"#frag",
    ])
    async def test_redirect_location_is_stored_url(self, client, url):
        key = await create(client, url)

        response = await client.get(f"/g/{key}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == url

    async def test_redirect_escapes_non_ascii(self, client):
        key = await create(client, "https://example.com/caf\u00e9")

        response = await client.get(f"/g/{key}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/caf%C3%A9"

    async def test_redirect_unknown_key(self, client):
        response = await client.get("/g/AAAAAAAAAAAAAAAA", follow_redirects=False)

        assert response.status_code == 404

    @pytest.mark.parametrize("key", [
        "short",
        "abcdefghijklmnopq",
        "abcdefghijklmn-p",
        "abcdefghijklmn%20p",
    ])
    async def test_redirect_bad_key_does_not_touch_storage(self, logger, key):
        store = BrokenStore()
        async with await make_client(store, logger) as client:
            response = await client.get(f"/g/{key}", follow_redirects=False)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid key format"
        assert store.calls == []

    async def test_redirect_storage_error(self, logger):
        async with await make_client(BrokenStore(), logger) as client:
            response = await client.get("/g/AAAAAAAAAAAAAAAA", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}

    async def test_redirect_counts_accesses(self, client):
        key = await create(client, "https://example.com/counted")

        for _ in range(3):
            response = await client.get(f"/g/{key}", follow_redirects=False)
            assert response.status_code == 302

        response = await client.get("/manage/")
        (item,) = response.json()["urls"]
        assert item == {"key": key, "url": "https://example.com/counted", "redirect_count": 3}

    async def test_redirect_expired_link(self, client, store):
        await store.put("ExpiredKey000000", "https://example.com", expires_at=1)

        response = await client.get("/g/ExpiredKey000000", follow_redirects=False)

        assert response.status_code == 404


@pytest.mark.asyncio
class TestListRedirects:
    """Test GET /manage/."""

    async def test_list_empty(self, client):
        response = await client.get("/manage/")

        assert response.status_code == 200
        assert response.json() == {"urls": []}

    async def test_list(self, client, sample_urls):
        keys = {await create(client, url): url for url in sample_urls}

        response = await client.get("/manage/")

        assert response.status_code == 200
        items = response.json()["urls"]
        assert {item["key"]: item["url"] for item in items} == keys
        assert all(item["redirect_count"] == 0 for item in items)

    async def test_list_storage_error(self, logger):
        async with await make_client(BrokenStore(), logger) as client:
            response = await client.get("/manage/")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}


@pytest.mark.asyncio
class TestDeleteRedirect:
    """Test DELETE /manage/{key}."""

    async def test_delete(self, client):
        key = await create(client, "https://example.com")

        response = await client.delete(f"/manage/{key}")

        assert response.status_code == 200
        assert response.json() == {"message": "Redirect deleted successfully"}
        assert (await client.get(f"/g/{key}")).status_code == 404

    async def test_delete_unknown_key(self, client):
        response = await client.delete("/manage/AAAAAAAAAAAAAAAA")

        assert response.status_code == 200
        assert response.json() == {"message": "Redirect deleted successfully"}

    async def test_delete_does_not_validate_key_format(self, client):
        response = await client.delete("/manage/not-a-valid-key")

        assert response.status_code == 200

    async def test_delete_storage_error(self, logger):
        async with await make_client(BrokenStore(), logger) as client:
            response = await client.delete("/manage/AAAAAAAAAAAAAAAA")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}
