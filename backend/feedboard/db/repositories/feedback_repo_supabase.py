"""Supabase-backed feedback repository using supabase-py v2."""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from ...domain.feedback import Board, Post, Project
from ...errors import RepositoryError
from .rows import row_to_board, row_to_post, row_to_project

POST_LIST_COLUMNS = """
    *,
    vote_count:votes(count),
    comment_count:comments(count)
"""


def _execute(query, what: str) -> List[Dict[str, Any]]:
    try:
        res = query.execute()
    except APIError as e:
        logger.warning("supabase {} failed: {}", what, e.message)
        raise RepositoryError(f"{what} failed: {e.message}") from e
    return res.data or []


class FeedbackRepositorySupabase:
    def __init__(self, client: Client) -> None:
        self.client = client

    def get_project_by_slug(self, slug: str) -> Optional[Project]:
        q = self.client.table("projects").select("*").eq("slug", slug).limit(1)
        rows = _execute(q, "project lookup")
        return row_to_project(rows[0]) if rows else None

    def get_board_for_project(self, project_id: str) -> Optional[Board]:
        q = self.client.table("boards").select("id, project_id").eq("project_id", project_id).limit(1)
        rows = _execute(q, "board lookup")
        return row_to_board(rows[0]) if rows else None

    def list_posts(
        self,
        board_id: str,
        *,
        status: str | None = None,
        sort_by: str | None = "votes",
    ) -> List[Post]:
        q = (
            self.client.table("posts")
            .select(POST_LIST_COLUMNS)
            .eq("board_id", board_id)
            .is_("duplicate_of", "null")
        )
        if status:
            q = q.eq("status", status)

        if sort_by == "votes":
            q = q.order("vote_count", desc=True)
        elif sort_by == "newest":
            q = q.order("created_at", desc=True)
        elif sort_by == "oldest":
            q = q.order("created_at", desc=False)

        return [row_to_post(r) for r in _execute(q, "posts query")]

    def create_post(
        self,
        board_id: str,
        *,
        title: str,
        description: str | None = None,
        author_email: str | None = None,
    ) -> Post:
        row = {
            "id": str(uuid.uuid4()),
            "board_id": board_id,
            "title": title,
            "description": description,
            "author_email": author_email,
            "status": "open",
        }
        created = _execute(self.client.table("posts").insert(row), "post insert")
        return row_to_post(created[0] if created else row)
