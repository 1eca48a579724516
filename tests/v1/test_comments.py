"""API tests for threaded comments."""
from __future__ import annotations

from collections.abc import Callable

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from plume.models import Comment, Post, User


def test_guest_comment_is_pending(client: TestClient, published_post: Post) -> None:
    response = client.post(
        f"/api/v1/posts/{published_post.id}/comments",
        json={"content": "Lovely", "author_name": "Guest", "author_email": "guest@example.com"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["is_approved"] is False
    assert body["author_name"] == "Guest"
    assert "author_email" not in body

    listing = client.get(f"/api/v1/posts/{published_post.id}/comments")
    assert listing.json() == []


def test_signed_in_comment_is_published(
    client: TestClient, published_post: Post, reader: User, reader_headers: dict[str, str]
) -> None:
    response = client.post(
        f"/api/v1/posts/{published_post.id}/comments",
        json={"content": "First!"},
        headers=reader_headers,
    )

    assert response.status_code == 201
    assert response.json()["is_approved"] is True
    assert response.json()["user"] == {"id": reader.id, "name": "Reader"}


def test_thread_is_nested(
    client: TestClient, published_post: Post, reader_headers: dict[str, str]
) -> None:
    url = f"/api/v1/posts/{published_post.id}/comments"
    root = client.post(url, json={"content": "root"}, headers=reader_headers).json()
    reply = client.post(
        url, json={"content": "reply", "parent_id": root["id"]}, headers=reader_headers
    ).json()

    tree = client.get(url).json()

    assert len(tree) == 1
    assert tree[0]["id"] == root["id"]
    assert [node["id"] for node in tree[0]["replies"]] == [reply["id"]]
    assert tree[0]["replies"][0]["replies"] == []


def test_reply_to_unknown_parent_is_rejected(client: TestClient, published_post: Post) -> None:
    response = client.post(
        f"/api/v1/posts/{published_post.id}/comments",
        json={"content": "reply", "parent_id": 9999},
    )
    assert response.status_code == 422


def test_comment_on_unknown_post(client: TestClient) -> None:
    response = client.post("/api/v1/posts/9999/comments", json={"content": "hello"})
    assert response.status_code == 404


def test_invalid_guest_email(client: TestClient, published_post: Post) -> None:
    response = client.post(
        f"/api/v1/posts/{published_post.id}/comments",
        json={"content": "hello", "author_email": "not-an-email"},
    )
    assert response.status_code == 422


def test_edit_own_comment(
    client: TestClient,
    published_post: Post,
    reader_headers: dict[str, str],
    make_user: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    created = client.post(
        f"/api/v1/posts/{published_post.id}/comments",
        json={"content": "typo"},
        headers=reader_headers,
    ).json()

    forbidden = client.put(
        f"/api/v1/comments/{created['id']}",
        json={"content": "hijack"},
        headers=auth_headers(make_user()),
    )
    assert forbidden.status_code == 403

    response = client.put(
        f"/api/v1/comments/{created['id']}",
        json={"content": "fixed"},
        headers=reader_headers,
    )
    assert response.status_code == 200
    assert response.json()["content"] == "fixed"


def test_edit_requires_authentication(client: TestClient, published_post: Post) -> None:
    created = client.post(
        f"/api/v1/posts/{published_post.id}/comments", json={"content": "guest"}
    ).json()
    response = client.put(f"/api/v1/comments/{created['id']}", json={"content": "x"})
    assert response.status_code == 401


def test_delete_removes_replies(
    client: TestClient,
    db_session: Session,
    published_post: Post,
    reader_headers: dict[str, str],
) -> None:
    url = f"/api/v1/posts/{published_post.id}/comments"
    root = client.post(url, json={"content": "root"}, headers=reader_headers).json()
    child = client.post(
        url, json={"content": "child", "parent_id": root["id"]}, headers=reader_headers
    ).json()
    client.post(url, json={"content": "grandchild", "parent_id": child["id"]})

    response = client.delete(f"/api/v1/comments/{root['id']}", headers=reader_headers)

    assert response.status_code == 200
    assert response.json()["deleted"] == 3
    assert db_session.query(Comment).filter(Comment.post_id == published_post.id).count() == 0


def test_admin_can_delete_any_comment(
    client: TestClient,
    published_post: Post,
    reader_headers: dict[str, str],
    admin_headers: dict[str, str],
) -> None:
    created = client.post(
        f"/api/v1/posts/{published_post.id}/comments",
        json={"content": "spam"},
        headers=reader_headers,
    ).json()

    response = client.delete(f"/api/v1/comments/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.delete(f"/api/v1/comments/{created['id']}", headers=admin_headers).status_code == 404
