from eventplanner.db.base import Base, TimestampMixin
from eventplanner.db.session import get_db, engine, AsyncSessionLocal

__all__ = ["Base", "TimestampMixin", "get_db", "engine", "AsyncSessionLocal"]
