"""API tests for the thread endpoints."""

import uuid

from fastapi import status


def test_post_and_comment(client, test_user, other_user, community) -> None:
    r = client.post(
        "/api/v1/threads/",
        json={"text": "Hello club", "author_id": test_user.id, "community_id": community.id},
    )
    assert r.status_code == status.HTTP_200_OK
    thread = r.json()
    assert thread["community"]["id"] == community.id

    r = client.post(
        "/api/v1/threads/add/comment",
        json={"thread_id": thread["id"], "text": "Hi!", "author_id": other_user.id},
    )
    assert r.status_code == status.HTTP_200_OK
    comment = r.json()
    assert comment["parent_thread_id"] == thread["id"]
    assert comment["community_id"] == community.id

    r = client.get(f"/api/v1/threads/{thread['id']}")
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert body["comments_count"] == 1
    assert [c["id"] for c in body["comments"]] == [comment["id"]]


def test_post_requires_existing_author(client) -> None:
    r = client.post("/api/v1/threads/", json={"text": "boo", "author_id": "user_ghost"})
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_comment_on_missing_thread(client, test_user) -> None:
    r = client.post(
        "/api/v1/threads/add/comment",
        json={"thread_id": str(uuid.uuid4()), "text": "?", "author_id": test_user.id},
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_get_thread_validation_and_missing(client) -> None:
    r = client.get("/api/v1/threads/not-a-uuid")
    assert r.status_code == 422

    r = client.get(f"/api/v1/threads/{uuid.uuid4()}")
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_list_threads_pages(client, test_user, make_thread) -> None:
    older = make_thread(test_user, "older")
    newer = make_thread(test_user, "newer")

    r = client.get("/api/v1/threads/", params={"skip": 0, "take": 1})
    assert [row["id"] for row in r.json()] == [str(newer.id)]
    r = client.get("/api/v1/threads/", params={"skip": 1, "take": 1})
    assert [row["id"] for row in r.json()] == [str(older.id)]


def test_user_and_community_threads(client, test_user, community, make_thread) -> None:
    inside = make_thread(test_user, "inside", community=community)
    outside = make_thread(test_user, "outside")

    r = client.get(f"/api/v1/threads/user/{test_user.id}")
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert body["user"]["id"] == test_user.id
    assert [row["id"] for row in body["threads"]] == [str(outside.id), str(inside.id)]

    r = client.get(f"/api/v1/threads/community/{community.id}")
    assert r.status_code == status.HTTP_200_OK
    assert [row["id"] for row in r.json()["threads"]] == [str(inside.id)]

    r = client.get("/api/v1/threads/community/org_missing")
    assert r.status_code == status.HTTP_404_NOT_FOUND
