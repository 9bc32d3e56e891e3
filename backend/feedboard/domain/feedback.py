"""Domain dataclasses for the feedback board (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


STATUS_LABELS = {
    "open": "Open",
    "planned": "Planned",
    "in_progress": "In Progress",
    "done": "Done",
    "declined": "Declined",
}

STATUS_FILTER_ALL = "all"

SORT_OPTIONS = {
    "votes": "Most Votes",
    "newest": "Newest",
    "oldest": "Oldest",
}


@dataclass(slots=True, frozen=True)
class Project:
    id: str
    name: str
    slug: str


@dataclass(slots=True, frozen=True)
class Board:
    id: str
    project_id: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Post:
    id: str
    title: str
    status: str
    created_at: str
    description: Optional[str] = None
    author_email: Optional[str] = None
    vote_count: int = 0
    comment_count: int = 0
    user_voted: bool = False

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, self.status)

    @property
    def author_name(self) -> str:
        if not self.author_email:
            return "Anonymous"
        return self.author_email.split("@")[0]
