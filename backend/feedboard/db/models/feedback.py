"""Feedback board ORM models mirroring the Supabase (PostgreSQL) schema."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base


class ProjectModel(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID string
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)


class BoardModel(Base):
    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    project_id: Mapped[str] = mapped_column(ForeignKey("projects.id"), unique=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)


class PostModel(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    board_id: Mapped[str] = mapped_column(ForeignKey("boards.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    author_email: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    status: Mapped[str] = mapped_column(String(20), default="open", nullable=False)
    duplicate_of: Mapped[Optional[str]] = mapped_column(ForeignKey("posts.id"), default=None)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)


class VoteModel(Base):
    __tablename__ = "votes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    post_id: Mapped[str] = mapped_column(ForeignKey("posts.id"), index=True, nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), default=None)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)


class CommentModel(Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    post_id: Mapped[str] = mapped_column(ForeignKey("posts.id"), index=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    author_email: Mapped[Optional[str]] = mapped_column(String(255), default=None)

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)
