"""Repository factory for the feedback board (supabase|sqlalchemy)."""
from __future__ import annotations

from typing import Optional

from flask import current_app
from sqlalchemy.orm import Session

from .feedback_repo import FeedbackRepository as SQLARepo
from .feedback_repo_supabase import FeedbackRepositorySupabase
from ..session import db
from ...errors import DatabaseUnavailable
from ...integrations.supabase_client import supabase_ext


def feedback_repo(session: Optional[Session] = None):
    """Return the configured repository or raise ``DatabaseUnavailable``."""
    backend = (current_app.config.get("FEEDBACK_REPO_BACKEND") or "supabase").lower()
    if backend == "supabase":
        client = supabase_ext.client
        if client is None:
            raise DatabaseUnavailable("Supabase client is not initialized; set SUPABASE_URL and a key.")
        return FeedbackRepositorySupabase(client)
    if session is None:
        if db.Session is None:
            raise DatabaseUnavailable("SQLAlchemy session is not initialized; set DATABASE_URL.")
        session = db.Session()
    return SQLARepo(session)
