from __future__ import annotations

from datetime import datetime

import pytest

from feedboard import create_app
from feedboard.auth.jwt import encode
from feedboard.config import BaseConfig
from feedboard.db.base import Base
from feedboard.db.models.feedback import BoardModel, CommentModel, PostModel, ProjectModel, VoteModel
from feedboard.db.session import db as database

JWT_SECRET = "feedboard-test-secret-0123456789abcdef"


class TestingConfig(BaseConfig):
    SECRET_KEY = "test"
    DATABASE_URL = "sqlite://"
    SQL_ECHO = False
    FEEDBACK_REPO_BACKEND = "sqlalchemy"
    SUPABASE_URL = None
    SUPABASE_ANON_KEY = None
    SUPABASE_SERVICE_ROLE_KEY = None
    JWT_SECRET = JWT_SECRET
    JWT_ALG = "HS256"
    LOG_LEVEL = "WARNING"


class SupabaseTestingConfig(TestingConfig):
    FEEDBACK_REPO_BACKEND = "supabase"


def auth_headers(app, email: str = "alice@example.com", sub: str = "user-1") -> dict:
    with app.app_context():
        token = encode({"sub": sub, "email": email, "aud": "authenticated"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    app.config["TESTING"] = True
    Base.metadata.create_all(database.engine)
    yield app
    Base.metadata.drop_all(database.engine)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    session = database.Session()
    yield session
    session.close()
    database.Session.remove()


def _votes(post_id: str, n: int):
    return [VoteModel(id=f"{post_id}-v{i}", post_id=post_id, user_id=f"u{i}") for i in range(n)]


def _comments(post_id: str, n: int):
    return [CommentModel(id=f"{post_id}-c{i}", post_id=post_id, content="+1") for i in range(n)]


@pytest.fixture
def seed_board(db):
    db.add(ProjectModel(id="proj-1", name="Acme", slug="acme"))
    db.add(ProjectModel(id="proj-2", name="Orphan", slug="orphan"))
    db.add(BoardModel(id="board-1", project_id="proj-1"))
    db.flush()
    db.add_all([
        PostModel(id="p1", board_id="board-1", title="Dark mode", description="Please add a DARK theme",
                  author_email="bob@example.com", status="planned", created_at=datetime(2024, 1, 2)),
        PostModel(id="p2", board_id="board-1", title="Export to CSV", description=None,
                  status="open", created_at=datetime(2024, 1, 3)),
        PostModel(id="p3", board_id="board-1", title="Slack integration", description="notify a channel",
                  author_email="carol@example.com", status="done", created_at=datetime(2024, 1, 1)),
    ])
    db.flush()
    db.add(PostModel(id="p4", board_id="board-1", title="Dark theme please", status="open",
                     duplicate_of="p1", created_at=datetime(2024, 1, 4)))
    db.add_all(_votes("p1", 2) + _votes("p3", 5) + _votes("p4", 9) + _comments("p1", 3))
    db.commit()
    return {"project_id": "proj-1", "board_id": "board-1"}
