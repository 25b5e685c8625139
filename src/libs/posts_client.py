"""
Client for the remote posts CRUD API.

No authentication, pagination or retries. Non-success responses surface as
``httpx.HTTPStatusError``.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog
from src.core.config import get_settings

logger = structlog.get_logger(__name__)

FileTypes = Any


class PostsClientProtocol(Protocol):
    """Protocol for the posts client (allows mocking)."""

    async def create_post(
        self, data: dict[str, Any], files: dict[str, FileTypes] | None = None
    ) -> Any: ...

    async def get_posts(self) -> Any: ...

    async def delete_post(self, post_id: str) -> Any: ...

    async def update_post(self, data: dict[str, Any]) -> Any: ...


class PostsClient:
    """Async posts API client."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.posts_api_base_url).rstrip("/")
        self.timeout = (
            timeout_seconds if timeout_seconds is not None else settings.posts_timeout_seconds
        )
        self.transport = transport

    async def create_post(
        self, data: dict[str, Any], files: dict[str, FileTypes] | None = None
    ) -> Any:
        """Create a post from a multipart form body."""
        # Plain fields go in as filename-less parts so the body is multipart
        # even when no file is attached.
        parts: list[tuple[str, Any]] = [(key, (None, str(value))) for key, value in data.items()]
        parts.extend((key, value) for key, value in (files or {}).items())
        return await self._request("POST", "/api/create-post", files=parts)

    async def get_posts(self) -> Any:
        return await self._request("GET", "/api/get-posts")

    async def delete_post(self, post_id: str) -> Any:
        return await self._request("DELETE", f"/api/delete-posts/{post_id}")

    async def update_post(self, data: dict[str, Any]) -> Any:
        """Update a post from a url-encoded form body."""
        return await self._request("POST", "/api/update-post", data=data)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.request(method, path, **kwargs)

        if response.is_error:
            await logger.awarning(
                "posts_api_error",
                method=method,
                path=path,
                status_code=response.status_code,
            )
        response.raise_for_status()

        await logger.adebug("posts_api_call", method=method, path=path)
        if not response.content:
            return None
        return response.json()
