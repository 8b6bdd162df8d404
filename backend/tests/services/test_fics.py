"""Fic Routes: metadata resolution through the permanent cache, URL catalog.

Tests cover:
    - Known URL → {id, title, source}
    - Second lookup of the same URL is served from cache (one upstream call)
    - Cache is keyed by the literal URL string
    - Upstream failure → 500 UPSTREAM_ERROR with a generic message, nothing cached
    - Missing url query → 400
    - /v1/urls lists distinct URLs carrying signals; a URL drops out after its
      last erase
"""

from sqlalchemy import func, select

from ficai_signals.core.errors import UpstreamError
from ficai_signals.models.fic import Fic, FicUrlCache
from tests.services.fake_fichub import NEMESIS, NEMESIS_URL, auth


async def test_resolves_known_url(client):
    res = await client.get("/v1/fics", params={"url": NEMESIS_URL})
    assert res.status_code == 200
    assert res.json() == {
        "id": "NtePoQrV",
        "title": "Nemesis",
        "source": NEMESIS_URL,
    }


async def test_second_lookup_is_served_from_cache(client, fic_source):
    first = await client.get("/v1/fics", params={"url": NEMESIS_URL})
    second = await client.get("/v1/fics", params={"url": NEMESIS_URL})

    assert first.json() == second.json()
    assert fic_source.calls == [NEMESIS_URL]


async def test_cache_survives_source_forgetting_the_fic(client, fic_source):
    await client.get("/v1/fics", params={"url": NEMESIS_URL})
    fic_source.known.clear()

    res = await client.get("/v1/fics", params={"url": NEMESIS_URL})
    assert res.status_code == 200
    assert res.json()["id"] == NEMESIS.id


async def test_cache_is_keyed_by_literal_url(client, fic_source, test_db):
    alias = NEMESIS_URL.rstrip("/")
    fic_source.known[alias] = NEMESIS

    await client.get("/v1/fics", params={"url": NEMESIS_URL})
    await client.get("/v1/fics", params={"url": alias})

    assert fic_source.calls == [NEMESIS_URL, alias]
    assert await test_db.scalar(select(func.count()).select_from(FicUrlCache)) == 2
    assert await test_db.scalar(select(func.count()).select_from(Fic)) == 1


async def test_upstream_failure_is_generic_500(client, test_db):
    res = await client.get("/v1/fics", params={"url": "https://example.com/nope"})
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "UPSTREAM_ERROR"
    assert error["message"] == UpstreamError.MESSAGE
    assert "404" not in error["message"]

    assert await test_db.scalar(select(func.count()).select_from(FicUrlCache)) == 0
    assert await test_db.scalar(select(func.count()).select_from(Fic)) == 0


async def test_failed_lookup_is_retried_next_time(client, fic_source):
    url = "https://example.com/later"
    first = await client.get("/v1/fics", params={"url": url})
    assert first.status_code == 500

    fic_source.known[url] = NEMESIS
    second = await client.get("/v1/fics", params={"url": url})
    assert second.status_code == 200
    assert fic_source.calls == [url, url]


async def test_missing_url_is_validation_error(client):
    res = await client.get("/v1/fics")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_urls_lists_distinct_urls_with_signals(client, register):
    alice = await register("alice@example.com")
    bob = await register("bob@example.com")
    for token in (alice, bob):
        await client.patch("/v1/signals", headers=auth(token), json={
            "url": "https://example.com/b", "add": ["fluff"],
        })
    await client.patch("/v1/signals", headers=auth(alice), json={
        "url": "https://example.com/a", "rm": ["angst"],
    })

    res = await client.get("/v1/urls")
    assert res.status_code == 200
    assert res.json() == {
        "urls": ["https://example.com/a", "https://example.com/b"],
    }


async def test_url_drops_out_after_last_erase(client, register):
    token = await register()
    await client.patch("/v1/signals", headers=auth(token), json={
        "url": "https://example.com/a", "add": ["fluff"],
    })
    await client.patch("/v1/signals", headers=auth(token), json={
        "url": "https://example.com/a", "erase": ["fluff"],
    })

    res = await client.get("/v1/urls")
    assert res.json() == {"urls": []}


async def test_resolved_urls_without_signals_are_not_listed(client):
    await client.get("/v1/fics", params={"url": NEMESIS_URL})
    res = await client.get("/v1/urls")
    assert res.json() == {"urls": []}
