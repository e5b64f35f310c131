from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from server import make_app


@pytest.fixture
async def client(aiohttp_client, store, users):
    return await aiohttp_client(make_app(store))


def as_user(user):
    return {"X-User-Id": str(user.id)}


async def test_health_is_public(client):
    resp = await client.get("/health")
    assert resp.status == 200


async def test_missing_identity_is_401(client):
    resp = await client.get("/wall")
    assert resp.status == 401
    resp = await client.get("/wall", headers={"X-User-Id": "abc"})
    assert resp.status == 401


async def test_post_comment_reply_flow(client, users):
    alice, bob, carol = users

    resp = await client.post("/posts", json={"content": "hello"}, headers=as_user(alice))
    assert resp.status == 201
    post = (await resp.json())["result"]
    assert post["comments_count"] == 0

    resp = await client.post(f"/posts/{post['id']}/comments", json={"content": "nice"}, headers=as_user(bob))
    assert resp.status == 201
    comment = (await resp.json())["result"]

    resp = await client.post(f"/comments/{comment['id']}/replies", data={"content": "+1"}, headers=as_user(carol))
    assert resp.status == 201
    reply = (await resp.json())["result"]
    assert reply["post_id"] == post["id"]

    resp = await client.get("/wall", headers=as_user(carol))
    body = await resp.json()
    assert body["status"] is True
    [wall_post] = body["result"]
    assert wall_post["comments_count"] == 1
    assert wall_post["comments"][0]["replies_count"] == 1
    assert wall_post["comments"][0]["replies"][0]["content"] == "+1"


async def test_status_mapping(client, users):
    alice, bob, _ = users
    resp = await client.post("/posts", json={"content": "mine"}, headers=as_user(alice))
    post = (await resp.json())["result"]

    resp = await client.post("/posts", json={"content": "   "}, headers=as_user(alice))
    assert resp.status == 400
    assert (await resp.json()) == {"status": False, "error": "Content is required"}

    resp = await client.put(f"/posts/{post['id']}", json={"content": "x"}, headers=as_user(bob))
    assert resp.status == 403

    resp = await client.delete(f"/posts/{post['id']}", headers=as_user(bob))
    assert resp.status == 403

    resp = await client.get("/posts/999", headers=as_user(bob))
    assert resp.status == 404

    resp = await client.delete("/comments/nope", headers=as_user(bob))
    assert resp.status == 400
    assert (await resp.json())["error"] == "Invalid comment ID"

    resp = await client.post("/posts", data="{not json", headers={**as_user(alice), "Content-Type": "application/json"})
    assert resp.status == 400

    resp = await client.post("/posts", data=b'{"content": "\xff\xfe"}',
                             headers={**as_user(alice), "Content-Type": "application/json"})
    assert resp.status == 400
    assert (await resp.json())["error"] == "Invalid JSON body"


async def test_author_updates_and_deletes(client, users):
    alice, bob, _ = users
    resp = await client.post("/posts", json={"content": "v1"}, headers=as_user(alice))
    post = (await resp.json())["result"]
    resp = await client.post(f"/posts/{post['id']}/comments", json={"content": "c"}, headers=as_user(bob))
    comment = (await resp.json())["result"]

    resp = await client.put(f"/comments/{comment['id']}", json={"content": "c2"}, headers=as_user(bob))
    assert (await resp.json())["result"]["content"] == "c2"
    resp = await client.put(f"/posts/{post['id']}", json={"content": "v2"}, headers=as_user(alice))
    assert (await resp.json())["result"]["content"] == "v2"

    resp = await client.delete(f"/comments/{comment['id']}", headers=as_user(bob))
    assert resp.status == 200
    resp = await client.delete(f"/posts/{post['id']}", headers=as_user(alice))
    assert resp.status == 200
    resp = await client.get(f"/posts/{post['id']}", headers=as_user(alice))
    assert resp.status == 404


async def test_store_failure_is_opaque(client, users, monkeypatch):
    alice, _, _ = users

    from database.repository import ContentRepository

    async def broken(self):
        raise OperationalError("SELECT", {}, Exception("secret host db.internal unreachable"))

    monkeypatch.setattr(ContentRepository, "list_posts_with_threads", broken)
    resp = await client.get("/wall", headers=as_user(alice))

    assert resp.status == 500
    assert (await resp.json()) == {"status": False, "error": "Server error"}
