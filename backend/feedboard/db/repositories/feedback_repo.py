"""SQLAlchemy-backed feedback repository returning dataclasses.

Post rows are shaped like the PostgREST response (count aggregates embedded
as ``[{"count": n}]``) so both backends share the same mapper.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.feedback import BoardModel, CommentModel, PostModel, ProjectModel, VoteModel
from ...domain.feedback import Board, Post, Project
from ...errors import RepositoryError
from .rows import row_to_board, row_to_post, row_to_project


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


def _post_row(m: PostModel, vote_count: int, comment_count: int) -> Dict[str, Any]:
    return {
        "id": m.id,
        "title": m.title,
        "description": m.description,
        "author_email": m.author_email,
        "status": m.status,
        "created_at": _iso(m.created_at),
        "vote_count": [{"count": vote_count}],
        "comment_count": [{"count": comment_count}],
    }


class FeedbackRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _wrap(self, what: str, err: SQLAlchemyError) -> RepositoryError:
        self.session.rollback()
        logger.warning("sqlalchemy {} failed: {}", what, err)
        return RepositoryError(f"{what} failed: {err}")

    def get_project_by_slug(self, slug: str) -> Optional[Project]:
        stmt = select(ProjectModel).where(ProjectModel.slug == slug).limit(1)
        try:
            m = self.session.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise self._wrap("project lookup", e) from e
        return row_to_project({"id": m.id, "name": m.name, "slug": m.slug}) if m else None

    def get_board_for_project(self, project_id: str) -> Optional[Board]:
        stmt = select(BoardModel).where(BoardModel.project_id == project_id).limit(1)
        try:
            m = self.session.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise self._wrap("board lookup", e) from e
        return row_to_board({"id": m.id, "project_id": m.project_id}) if m else None

    def list_posts(
        self,
        board_id: str,
        *,
        status: str | None = None,
        sort_by: str | None = "votes",
    ) -> List[Post]:
        votes = (
            select(VoteModel.post_id, func.count(VoteModel.id).label("n"))
            .group_by(VoteModel.post_id)
            .subquery()
        )
        comments = (
            select(CommentModel.post_id, func.count(CommentModel.id).label("n"))
            .group_by(CommentModel.post_id)
            .subquery()
        )
        vote_count = func.coalesce(votes.c.n, 0).label("vote_count")
        comment_count = func.coalesce(comments.c.n, 0).label("comment_count")

        stmt: Select = (
            select(PostModel, vote_count, comment_count)
            .outerjoin(votes, votes.c.post_id == PostModel.id)
            .outerjoin(comments, comments.c.post_id == PostModel.id)
            .where(PostModel.board_id == board_id, PostModel.duplicate_of.is_(None))
        )
        if status:
            stmt = stmt.where(PostModel.status == status)

        if sort_by == "votes":
            stmt = stmt.order_by(vote_count.desc())
        elif sort_by == "newest":
            stmt = stmt.order_by(PostModel.created_at.desc())
        elif sort_by == "oldest":
            stmt = stmt.order_by(PostModel.created_at.asc())

        try:
            result = self.session.execute(stmt).all()
        except SQLAlchemyError as e:
            raise self._wrap("posts query", e) from e
        return [row_to_post(_post_row(m, votes_n, comments_n)) for m, votes_n, comments_n in result]

    def create_post(
        self,
        board_id: str,
        *,
        title: str,
        description: str | None = None,
        author_email: str | None = None,
    ) -> Post:
        m = PostModel(
            id=str(uuid.uuid4()),
            board_id=board_id,
            title=title,
            description=description,
            author_email=author_email,
            status="open",
        )
        try:
            self.session.add(m)
            self.session.commit()
            self.session.refresh(m)
        except SQLAlchemyError as e:
            raise self._wrap("post insert", e) from e
        return row_to_post(_post_row(m, 0, 0))
