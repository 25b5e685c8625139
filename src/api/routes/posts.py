"""Pass-through routes for the remote posts API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status
from src.api.deps import get_current_user, get_posts_client
from src.domain import User
from src.libs.posts_client import PostsClientProtocol

router = APIRouter(prefix="/posts", tags=["Posts"])
logger = structlog.get_logger()


def _upstream_error(exc: httpx.HTTPStatusError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Posts API error {exc.response.status_code}",
    )


@router.get("")
async def list_posts(
    client: PostsClientProtocol = Depends(get_posts_client),
    user: User = Depends(get_current_user),
) -> Any:
    try:
        return await client.get_posts()
    except httpx.HTTPStatusError as exc:
        raise _upstream_error(exc) from exc


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: dict[str, Any] = Body(...),
    client: PostsClientProtocol = Depends(get_posts_client),
    user: User = Depends(get_current_user),
) -> Any:
    try:
        return await client.create_post(payload)
    except httpx.HTTPStatusError as exc:
        raise _upstream_error(exc) from exc


@router.put("")
async def update_post(
    payload: dict[str, Any] = Body(...),
    client: PostsClientProtocol = Depends(get_posts_client),
    user: User = Depends(get_current_user),
) -> Any:
    try:
        return await client.update_post(payload)
    except httpx.HTTPStatusError as exc:
        raise _upstream_error(exc) from exc


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    client: PostsClientProtocol = Depends(get_posts_client),
    user: User = Depends(get_current_user),
) -> Any:
    try:
        return await client.delete_post(post_id)
    except httpx.HTTPStatusError as exc:
        raise _upstream_error(exc) from exc
