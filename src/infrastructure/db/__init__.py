from . import models  # noqa: F401
from .base import Base
from .session import create_schema, dispose_engine, get_session, get_session_factory

__all__ = ["Base", "create_schema", "dispose_engine", "get_session", "get_session_factory"]
