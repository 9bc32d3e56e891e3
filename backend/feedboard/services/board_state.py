"""Immutable feedback-board page state and its transitions.

Every event that changes the page produces a new ``BoardPageState`` through
one of the functions below; nothing mutates a state in place. Results of a
load carry the request sequence number they were started with and are
dropped when a newer load has begun since.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..domain.feedback import STATUS_FILTER_ALL, Post, Project


class LoadStage(str, Enum):
    IDLE = "idle"
    RESOLVING_PROJECT = "resolving_project"
    RESOLVING_BOARD = "resolving_board"
    LOADING_POSTS = "loading_posts"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class BoardPageState:
    slug: str
    project: Optional[Project] = None
    board_id: Optional[str] = None
    posts: Tuple[Post, ...] = ()
    loading: bool = True
    error: str = ""
    search_term: str = ""
    status_filter: str = STATUS_FILTER_ALL
    sort_by: str = "votes"
    show_post_form: bool = False
    stage: LoadStage = LoadStage.IDLE
    request_seq: int = 0
    redirect_to: Optional[str] = None

    @property
    def visible_posts(self) -> List[Post]:
        return filter_posts(self.posts, self.search_term)

    @property
    def can_submit(self) -> bool:
        """The submission modal mounts only once project and board are known."""
        return self.show_post_form and self.project is not None and self.board_id is not None


def filter_posts(posts: Iterable[Post], search_term: str) -> List[Post]:
    term = (search_term or "").lower()
    return [
        p for p in posts
        if term in (p.title or "").lower() or term in (p.description or "").lower()
    ]


def _is_current(state: BoardPageState, seq: int) -> bool:
    return state.request_seq == seq


# --- load pipeline ---

def load_started(state: BoardPageState) -> BoardPageState:
    return replace(
        state,
        loading=True,
        stage=LoadStage.RESOLVING_PROJECT,
        request_seq=state.request_seq + 1,
        redirect_to=None,
    )


def project_resolved(state: BoardPageState, seq: int, project: Project) -> BoardPageState:
    if not _is_current(state, seq):
        return state
    return replace(state, project=project, stage=LoadStage.RESOLVING_BOARD)


def board_resolved(state: BoardPageState, seq: int, board_id: str) -> BoardPageState:
    if not _is_current(state, seq):
        return state
    return replace(state, board_id=board_id, stage=LoadStage.LOADING_POSTS)


def posts_loaded(state: BoardPageState, seq: int, posts: Iterable[Post]) -> BoardPageState:
    if not _is_current(state, seq):
        return state
    return replace(state, posts=tuple(posts), stage=LoadStage.READY)


def load_failed(state: BoardPageState, seq: int, redirect_to: str | None = None) -> BoardPageState:
    if not _is_current(state, seq):
        return state
    return replace(state, stage=LoadStage.FAILED, redirect_to=redirect_to)


def load_finished(state: BoardPageState, seq: int) -> BoardPageState:
    if not _is_current(state, seq):
        return state
    return replace(state, loading=False)


def database_unavailable(state: BoardPageState, message: str) -> BoardPageState:
    return replace(state, error=message, loading=False, stage=LoadStage.FAILED)


# --- user input ---

def search_changed(state: BoardPageState, search_term: str) -> BoardPageState:
    return replace(state, search_term=search_term)


def status_filter_changed(state: BoardPageState, status_filter: str) -> BoardPageState:
    return replace(state, status_filter=status_filter)


def sort_changed(state: BoardPageState, sort_by: str) -> BoardPageState:
    return replace(state, sort_by=sort_by)


def slug_changed(state: BoardPageState, slug: str) -> BoardPageState:
    return replace(state, slug=slug)


def post_form_toggled(state: BoardPageState, show: bool) -> BoardPageState:
    return replace(state, show_post_form=show)


def vote_changed(state: BoardPageState, post_id: str, vote_count: int, user_voted: bool) -> BoardPageState:
    posts = tuple(
        replace(p, vote_count=vote_count, user_voted=user_voted) if p.id == post_id else p
        for p in state.posts
    )
    return replace(state, posts=posts)
