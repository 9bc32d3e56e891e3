"""Pydantic request/response schemas for the board page and API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

StatusFilter = Literal["all", "open", "planned", "in_progress", "done", "declined"]


class BoardQueryIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    q: str = ""
    status: StatusFilter = "all"
    # unknown sort keys fall back to the backend's default order
    sort: str = "votes"
    submit: bool = False


class PostCreateIn(BaseModel):
    board_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v or None


class ProjectOut(BaseModel):
    id: str
    name: str
    slug: str


class PostOut(BaseModel):
    id: str
    title: str
    description: Optional[str]
    author_email: Optional[str]
    status: str
    created_at: str
    vote_count: int
    comment_count: int
    user_voted: bool


class BoardPageOut(BaseModel):
    project: Optional[ProjectOut]
    board_id: Optional[str]
    search_term: str
    status_filter: str
    sort_by: str
    total: int
    posts: List[PostOut]
