"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

from typing import Any, Dict

from flask import Flask
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool


def _engine_options(app: Flask, url: str) -> Dict[str, Any]:
    opts: Dict[str, Any] = {"echo": app.config.get("SQL_ECHO", False), "future": True}
    if url.startswith("sqlite"):
        # sqlite has no server-side pool; in-memory databases must share one connection
        opts["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            opts["poolclass"] = StaticPool
        return opts
    opts.update(
        pool_pre_ping=True,
        pool_size=app.config.get("POOL_SIZE", 10),
        max_overflow=app.config.get("MAX_OVERFLOW", 20),
    )
    return opts


class Database:
    def __init__(self) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]

    def init_app(self, app: Flask) -> None:
        url: str = app.config["DATABASE_URL"]
        self.engine = create_engine(url, **_engine_options(app, url))
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False, future=True)
        )

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()

    def create_all(self) -> None:
        from .base import Base
        from .models import paper  # noqa: F401

        assert self.engine is not None, "Database is not initialized"
        Base.metadata.create_all(self.engine)


db = Database()
