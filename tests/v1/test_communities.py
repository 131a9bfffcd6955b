"""API tests for the community endpoints."""

from fastapi import status


def test_create_community(client, test_user) -> None:
    payload = {
        "id": "org_chess",
        "username": "chess",
        "name": "Chess Club",
        "created_by_id": test_user.id,
    }
    r = client.post("/api/v1/communities/", json=payload)
    assert r.status_code == status.HTTP_201_CREATED
    body = r.json()
    assert body["members_count"] == 1
    assert body["bio"] == ""

    r = client.post("/api/v1/communities/", json=payload)
    assert r.status_code == status.HTTP_409_CONFLICT


def test_create_community_unknown_creator(client) -> None:
    r = client.post(
        "/api/v1/communities/",
        json={"id": "org_x", "username": "x", "name": "X", "created_by_id": "user_ghost"},
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_list_and_get_community(client, community) -> None:
    r = client.get("/api/v1/communities/", params={"search_term": "read"})
    assert r.status_code == status.HTTP_200_OK
    rows = r.json()
    assert [row["id"] for row in rows] == [community.id]
    assert rows[0]["members_count"] == 1

    r = client.get(f"/api/v1/communities/{community.id}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["username"] == "readers"

    r = client.get("/api/v1/communities/org_missing")
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_join_and_leave(client, community, other_user) -> None:
    url = f"/api/v1/communities/{community.id}/members/{other_user.id}"

    r = client.post(url)
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "joined"}
    r = client.post(url)
    assert r.status_code == status.HTTP_200_OK

    r = client.get(f"/api/v1/communities/{community.id}/profile")
    assert r.status_code == status.HTTP_200_OK
    members = {member["id"] for member in r.json()["members"]}
    assert other_user.id in members

    r = client.delete(url)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    r = client.delete(url)
    assert r.status_code == status.HTTP_204_NO_CONTENT

    r = client.get(f"/api/v1/communities/{community.id}")
    assert r.json()["members_count"] == 1


def test_join_missing_user(client, community) -> None:
    r = client.post(f"/api/v1/communities/{community.id}/members/user_ghost")
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_suggest_communities(client, community) -> None:
    r = client.get("/api/v1/communities/suggest")
    assert r.status_code == status.HTTP_200_OK
    assert [row["id"] for row in r.json()] == [community.id]
