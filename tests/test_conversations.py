"""Tests for conversation endpoints."""

import uuid


def test_create_conversation(client, auth_header):
    resp = client.post("/api/v1/conversations", json={"title": "Essay Help"}, headers=auth_header)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["title"] == "Essay Help"
    assert data["id"]
    assert data["last_message_at"] > 0


def test_create_conversation_default_title(client, auth_header):
    resp = client.post("/api/v1/conversations", json={}, headers=auth_header)
    assert resp.status_code == 201
    assert resp.json()["data"]["title"].startswith("Study Session - ")


def test_create_conversation_no_auth(client):
    resp = client.post("/api/v1/conversations", json={"title": "No Auth"})
    assert resp.status_code == 401


def test_list_conversations_no_auth(client):
    resp = client.get("/api/v1/conversations")
    assert resp.status_code == 401
    assert resp.json()["error"]["type"] == "authentication_error"


def test_list_conversations(client, auth_header):
    create = client.post("/api/v1/conversations", json={"title": "List Test"}, headers=auth_header)
    conv_id = create.json()["data"]["id"]

    resp = client.get("/api/v1/conversations", headers=auth_header)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "success"
    assert conv_id in [c["id"] for c in body["data"]]


def test_list_ordered_by_last_activity(client, auth_header):
    older = client.post("/api/v1/conversations", json={"title": "Older"}, headers=auth_header).json()["data"]
    client.post("/api/v1/conversations", json={"title": "Newer"}, headers=auth_header)

    # A message moves the older conversation to the top
    client.post(f"/api/v1/conversations/{older['id']}/messages", json={"content": "bump"}, headers=auth_header)

    data = client.get("/api/v1/conversations", headers=auth_header).json()["data"]
    assert data[0]["id"] == older["id"]
    stamps = [c["last_message_at"] for c in data]
    assert stamps == sorted(stamps, reverse=True)


def test_conversations_are_private(client, auth_header, other_header):
    create = client.post("/api/v1/conversations", json={"title": "Private"}, headers=auth_header)
    conv_id = create.json()["data"]["id"]

    resp = client.get("/api/v1/conversations", headers=other_header)
    assert conv_id not in [c["id"] for c in resp.json()["data"]]


def test_get_conversation(client, auth_header):
    create = client.post("/api/v1/conversations", json={"title": "Get Test"}, headers=auth_header)
    conv_id = create.json()["data"]["id"]

    resp = client.get(f"/api/v1/conversations/{conv_id}", headers=auth_header)
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == conv_id


def test_get_conversation_not_found(client, auth_header):
    fake_id = str(uuid.uuid4())
    resp = client.get(f"/api/v1/conversations/{fake_id}", headers=auth_header)
    assert resp.status_code == 404
    assert resp.json()["error"]["type"] == "not_found"


def test_ownership_check(client, auth_header, other_header):
    """Another user's conversation looks exactly like a missing one."""
    create = client.post("/api/v1/conversations", json={"title": "Private"}, headers=auth_header)
    conv_id = create.json()["data"]["id"]

    resp = client.get(f"/api/v1/conversations/{conv_id}", headers=other_header)
    assert resp.status_code == 404
