from fastapi import FastAPI

from . import auth, developers, health, posts, projects


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(developers.router)
    app.include_router(projects.router)
    app.include_router(posts.router)
