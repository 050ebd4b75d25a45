"""
Tests for trip members, invite links and public share links.
"""


def test_invite_member_by_email(client, auth_headers, register, trip):
    bob_headers, bob = register(email="bob@example.com", name="Bob")

    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "bob@example.com", "role": "viewer"},
        headers=auth_headers
    )
    assert response.status_code == 201
    assert response.json()["member"] == {
        "userId": bob["id"], "email": "bob@example.com", "name": "Bob", "role": "viewer"
    }

    members = client.get(f"/api/trips/{trip['id']}/members", headers=bob_headers).json()["members"]
    assert [m["role"] for m in members] == ["owner", "viewer"]

    state = client.get("/api/state", headers=bob_headers).json()
    assert state["trips"][0]["role"] == "viewer"


def test_invite_rejects_unknown_and_duplicate(client, auth_headers, register, trip):
    register(email="bob@example.com")
    url = f"/api/trips/{trip['id']}/members"

    assert client.post(url, json={"email": "ghost@example.com"}, headers=auth_headers).status_code == 404
    assert client.post(url, json={"email": "bob@example.com"}, headers=auth_headers).status_code == 201
    assert client.post(url, json={"email": "bob@example.com"}, headers=auth_headers).status_code == 400
    assert client.post(url, json={"email": "bob@example.com", "role": "owner"}, headers=auth_headers).status_code == 422


def test_viewer_cannot_edit(client, auth_headers, register, trip):
    bob_headers, _ = register(email="bob@example.com")
    client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "bob@example.com", "role": "viewer"},
        headers=auth_headers
    )

    response = client.post(
        f"/api/trips/{trip['id']}/activities",
        json={"dayIndex": 0, "title": "Sneaky"},
        headers=bob_headers
    )
    assert response.status_code == 403
    assert client.put(f"/api/trips/{trip['id']}", json={"name": "Mine"}, headers=bob_headers).status_code == 403
    assert client.get(f"/api/trips/{trip['id']}/activities", headers=bob_headers).status_code == 200


def test_participant_edits_but_cannot_delete(client, auth_headers, register, trip):
    bob_headers, bob = register(email="bob@example.com")
    client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "bob@example.com", "role": "participant"},
        headers=auth_headers
    )

    response = client.post(
        f"/api/trips/{trip['id']}/activities",
        json={"dayIndex": 0, "title": "Fado night"},
        headers=bob_headers
    )
    assert response.status_code == 201
    assert client.delete(f"/api/trips/{trip['id']}", headers=bob_headers).status_code == 403
    assert client.delete(f"/api/trips/{trip['id']}/members/{bob['id']}", headers=bob_headers).status_code == 403


def test_change_role_and_remove_member(client, auth_headers, register, trip):
    bob_headers, bob = register(email="bob@example.com")
    client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "bob@example.com", "role": "viewer"},
        headers=auth_headers
    )

    response = client.patch(
        f"/api/trips/{trip['id']}/members/{bob['id']}",
        json={"role": "participant"},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["member"]["role"] == "participant"

    response = client.delete(f"/api/trips/{trip['id']}/members/{bob['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/api/trips/{trip['id']}", headers=bob_headers).status_code == 404


def test_invite_link(client, auth_headers, register, trip):
    response = client.post(f"/api/trips/{trip['id']}/invites", json={"role": "participant"}, headers=auth_headers)
    assert response.status_code == 201
    token = response.json()["inviteToken"]

    bob_headers, _ = register(email="bob@example.com")
    response = client.post(f"/api/invites/{token}/accept", headers=bob_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "participant"
    assert response.json()["trip"]["id"] == trip["id"]

    # The owner following their own link stays owner
    response = client.post(f"/api/invites/{token}/accept", headers=auth_headers)
    assert response.json()["role"] == "owner"

    assert client.post("/api/invites/nope/accept", headers=bob_headers).status_code == 404


def test_invite_link_never_downgrades(client, auth_headers, register, trip):
    bob_headers, _ = register(email="bob@example.com")
    client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "bob@example.com", "role": "participant"},
        headers=auth_headers
    )
    token = client.post(
        f"/api/trips/{trip['id']}/invites", json={"role": "viewer"}, headers=auth_headers
    ).json()["inviteToken"]

    response = client.post(f"/api/invites/{token}/accept", headers=bob_headers)
    assert response.json()["role"] == "participant"


def test_share_link(client, auth_headers, trip):
    trip_id = trip["id"]
    client.post(f"/api/trips/{trip_id}/activities", json={"dayIndex": 2, "title": "Oceanário"}, headers=auth_headers)
    client.post(f"/api/trips/{trip_id}/expenses", json={"description": "Secret", "amount": 100}, headers=auth_headers)

    first = client.post(f"/api/trips/{trip_id}/share", headers=auth_headers)
    assert first.status_code == 200
    token = first.json()["shareToken"]
    assert client.post(f"/api/trips/{trip_id}/share", headers=auth_headers).json()["shareToken"] == token

    response = client.get(f"/api/share/{token}")
    assert response.status_code == 200
    shared = response.json()
    assert shared["trip"]["name"] == "Lisbon"
    assert [day["dayIndex"] for day in shared["days"]] == [0, 1, 2]
    assert shared["activities"][0]["title"] == "Oceanário"
    assert "expenses" not in shared

    assert client.get("/api/share/unknown").status_code == 404
