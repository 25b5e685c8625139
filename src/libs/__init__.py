"""Shared library helpers."""

from src.libs.posts_client import PostsClient, PostsClientProtocol

__all__ = [
    "PostsClient",
    "PostsClientProtocol",
]
