"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

from typing import Any, Dict

from flask import Flask
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool


class Database:
    def __init__(self) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]

    def init_app(self, app: Flask) -> None:
        url: str = app.config["DATABASE_URL"]
        echo: bool = app.config.get("SQL_ECHO", False)

        options: Dict[str, Any] = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            # single shared connection so an in-memory database survives across sessions
            options.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
        else:
            options.update(
                pool_pre_ping=True,
                pool_size=app.config.get("POOL_SIZE", 10),
                max_overflow=app.config.get("MAX_OVERFLOW", 20),
            )

        self.engine = create_engine(url, **options)
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False, future=True)
        )

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()


db = Database()
