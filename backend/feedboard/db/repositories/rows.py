"""Row -> domain mappers shared by the supabase and sqlalchemy repositories.

Rows follow the PostgREST shape: scalar columns plus embedded count
aggregates, e.g. ``{"id": ..., "vote_count": [{"count": 3}], ...}``.
"""
from __future__ import annotations

from typing import Any, Mapping

from ...domain.feedback import Board, Post, Project


def aggregate_count(value: Any) -> int:
    """First aggregate row's ``count``; 0 when absent, empty or malformed."""
    if not isinstance(value, (list, tuple)) or not value:
        return 0
    first = value[0]
    if not isinstance(first, Mapping):
        return 0
    try:
        return int(first.get("count") or 0)
    except (TypeError, ValueError):
        return 0


def row_to_post(row: Mapping[str, Any]) -> Post:
    return Post(
        id=str(row.get("id")),
        title=row.get("title") or "",
        description=row.get("description"),
        author_email=row.get("author_email"),
        status=row.get("status") or "open",
        created_at=str(row.get("created_at") or ""),
        vote_count=aggregate_count(row.get("vote_count")),
        comment_count=aggregate_count(row.get("comment_count")),
        # per-user vote lookup is not wired into the listing yet
        user_voted=False,
    )


def row_to_project(row: Mapping[str, Any]) -> Project:
    return Project(id=str(row.get("id")), name=row.get("name") or "", slug=row.get("slug") or "")


def row_to_board(row: Mapping[str, Any]) -> Board:
    project_id = row.get("project_id")
    return Board(id=str(row.get("id")), project_id=str(project_id) if project_id is not None else None)

