from tests.conftest import api_headers, sign_up

ENTRY = {
    "title": "A good day",
    "content": "Went for a long walk by the river.",
    "emotion_score": 8,
    "tags": ["walk", " nature ", "walk", ""],
}


def test_create_and_get_entry(client, session):
    headers = session["headers"]
    response = client.post("/v1/entries", json=ENTRY, headers=headers)
    assert response.status_code == 201
    created = response.json()
    assert created["tags"] == ["walk", "nature"]
    assert created["user_id"] == session["user"]["id"]
    assert created["created_at"].endswith("+00:00")

    fetched = client.get(f"/v1/entries/{created['id']}", headers=headers).json()
    assert fetched == created


def test_entry_validation(client, session):
    headers = session["headers"]
    short = client.post("/v1/entries", json={**ENTRY, "content": "short"}, headers=headers)
    assert short.status_code == 422
    high = client.post("/v1/entries", json={**ENTRY, "emotion_score": 11}, headers=headers)
    assert high.status_code == 422
    empty_title = client.post("/v1/entries", json={**ENTRY, "title": "   "}, headers=headers)
    assert empty_title.status_code == 422


def test_list_entries_newest_first_with_limit(client, session):
    headers = session["headers"]
    ids = []
    for idx in range(3):
        created = client.post("/v1/entries", json={**ENTRY, "title": f"Entry {idx}"}, headers=headers).json()
        ids.append(created["id"])
    items = client.get("/v1/entries", headers=headers).json()["items"]
    assert {item["id"] for item in items} == set(ids)
    stamps = [item["created_at"] for item in items]
    assert stamps == sorted(stamps, reverse=True)

    limited = client.get("/v1/entries", params={"limit": 2}, headers=headers).json()["items"]
    assert len(limited) == 2


def test_update_entry_patches_only_given_fields(client, session):
    headers = session["headers"]
    created = client.post("/v1/entries", json=ENTRY, headers=headers).json()
    response = client.patch(f"/v1/entries/{created['id']}", json={"emotion_score": 3}, headers=headers)
    assert response.status_code == 200
    updated = response.json()
    assert updated["emotion_score"] == 3
    assert updated["title"] == ENTRY["title"]
    assert updated["updated_at"] >= created["updated_at"]


def test_delete_entry(client, session):
    headers = session["headers"]
    created = client.post("/v1/entries", json=ENTRY, headers=headers).json()
    assert client.delete(f"/v1/entries/{created['id']}", headers=headers).status_code == 200
    assert client.get(f"/v1/entries/{created['id']}", headers=headers).status_code == 404
    assert client.delete(f"/v1/entries/{created['id']}", headers=headers).status_code == 404


def test_other_users_entry_is_not_found(client, session):
    created = client.post("/v1/entries", json=ENTRY, headers=session["headers"]).json()
    other = sign_up(client, email="other@example.com")
    other_headers = api_headers(other["access_token"])

    assert client.get(f"/v1/entries/{created['id']}", headers=other_headers).status_code == 404
    assert client.patch(
        f"/v1/entries/{created['id']}", json={"emotion_score": 1}, headers=other_headers
    ).status_code == 404
    assert client.delete(f"/v1/entries/{created['id']}", headers=other_headers).status_code == 404
    assert client.get("/v1/entries", headers=other_headers).json()["items"] == []
