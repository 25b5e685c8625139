from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient
from src.core.auth import create_access_token
from src.domain import Role

SALES_EMAIL = "sales@cmtai.com"
CTO_EMAIL = "cto@cmtai.com"
DEV1_EMAIL = "dev1@cmtai.com"
DEV2_EMAIL = "dev2@cmtai.com"


def auth_headers(user_id: str = "1", role: Role = Role.ORIGINATOR) -> dict[str, str]:
    """Headers for a seeded user without going through /auth/login."""
    token = create_access_token(user_id, role=role)
    return {"Authorization": f"Bearer {token}"}


def login(client: TestClient, email: str) -> dict[str, str]:
    response = client.post("/auth/login", json={"email": email, "password": "anything"})
    assert response.status_code == 200, response.text
    token = response.json()["tokens"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


def build_project_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "client_name": "Acme",
        "client_email": "owner@acme.example.com",
        "client_phone": "555-000-1111",
        "description": "Marketing site rebuild",
        "requirements": "CMS, blog, contact form",
    }
    payload.update(overrides)
    return payload


class FakePostsClient:
    """In-memory stand-in for the remote posts API."""

    def __init__(self) -> None:
        self.posts: list[dict[str, Any]] = []
        self.calls: list[tuple[str, Any]] = []

    async def create_post(self, data: dict[str, Any], files: dict[str, Any] | None = None) -> Any:
        self.calls.append(("create", data))
        post = {"_id": str(len(self.posts) + 1), **data}
        self.posts.append(post)
        return post

    async def get_posts(self) -> Any:
        self.calls.append(("list", None))
        return {"data": list(self.posts)}

    async def delete_post(self, post_id: str) -> Any:
        self.calls.append(("delete", post_id))
        self.posts = [p for p in self.posts if p["_id"] != post_id]
        return {"success": True}

    async def update_post(self, data: dict[str, Any]) -> Any:
        self.calls.append(("update", data))
        return {"success": True, **data}
