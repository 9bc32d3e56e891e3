"""Feedback board page controller.

Owns the page state and runs the load pipeline
``ResolvingProject -> ResolvingBoard -> LoadingPosts -> Ready | Failed``.
Each stage scopes the next query, so the stages run strictly in order.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from loguru import logger

from ..domain.feedback import STATUS_FILTER_ALL, Board, Post, Project
from ..errors import DatabaseUnavailable, RepositoryError
from . import board_state as st
from .board_state import BoardPageState
from .notifications import Notifier, notification_kind

DB_UNAVAILABLE_MESSAGE = "Database connection not available. Please refresh the page."
ROOT_ROUTE = "/"


class FeedbackRepo(Protocol):
    def get_project_by_slug(self, slug: str) -> Optional[Project]: ...

    def get_board_for_project(self, project_id: str) -> Optional[Board]: ...

    def list_posts(self, board_id: str, *, status: str | None = None, sort_by: str | None = "votes") -> List[Post]: ...


class BoardPageController:
    def __init__(
        self,
        repo_factory: Callable[[], FeedbackRepo],
        notify: Notifier,
        slug: str,
        *,
        status_filter: str = STATUS_FILTER_ALL,
        sort_by: str = "votes",
        search_term: str = "",
    ) -> None:
        self._repo_factory = repo_factory
        self._notify = notify
        self._state = BoardPageState(
            slug=slug,
            status_filter=status_filter,
            sort_by=sort_by,
            search_term=search_term,
        )

    @property
    def state(self) -> BoardPageState:
        return self._state

    @property
    def visible_posts(self) -> List[Post]:
        return self._state.visible_posts

    def mount(self) -> BoardPageState:
        return self.load()

    def load(self) -> BoardPageState:
        try:
            repo = self._repo_factory()
        except DatabaseUnavailable as e:
            logger.error("board page for {!r}: {}", self._state.slug, e)
            self._state = st.database_unavailable(self._state, DB_UNAVAILABLE_MESSAGE)
            return self._state

        self._state = st.load_started(self._state)
        seq = self._state.request_seq
        try:
            self._run(repo, seq)
        except Exception:
            # last-resort guard: the page must stay usable after any failure
            logger.exception("board page load failed for {!r}", self._state.slug)
            self._notify("Something went wrong", "error")
        finally:
            self._state = st.load_finished(self._state, seq)
        return self._state

    def _run(self, repo: FeedbackRepo, seq: int) -> None:
        slug = self._state.slug

        try:
            project = repo.get_project_by_slug(slug)
        except RepositoryError as e:
            logger.error("project lookup for {!r} failed: {}", slug, e)
            project = None
        if project is None:
            self._notify("Project not found", "error")
            self._state = st.load_failed(self._state, seq, redirect_to=ROOT_ROUTE)
            return
        self._state = st.project_resolved(self._state, seq, project)

        try:
            board = repo.get_board_for_project(project.id)
        except RepositoryError as e:
            logger.error("board lookup for project {} failed: {}", project.id, e)
            board = None
        if board is None:
            self._notify("Board not found", "error")
            self._state = st.load_failed(self._state, seq)
            return
        self._state = st.board_resolved(self._state, seq, board.id)

        status_filter = self._state.status_filter
        status = None if status_filter == STATUS_FILTER_ALL else status_filter
        try:
            posts = repo.list_posts(board.id, status=status, sort_by=self._state.sort_by)
        except RepositoryError as e:
            logger.error("Error loading posts: {}", e)
            self._notify("Error loading posts", "error")
            self._state = st.load_failed(self._state, seq)
            return
        self._state = st.posts_loaded(self._state, seq, posts)

    # --- inputs that re-run the load ---

    def set_slug(self, slug: str) -> BoardPageState:
        if slug == self._state.slug:
            return self._state
        self._state = st.slug_changed(self._state, slug)
        return self.load()

    def set_status_filter(self, status_filter: str) -> BoardPageState:
        if status_filter == self._state.status_filter:
            return self._state
        self._state = st.status_filter_changed(self._state, status_filter)
        return self.load()

    def set_sort(self, sort_by: str) -> BoardPageState:
        if sort_by == self._state.sort_by:
            return self._state
        self._state = st.sort_changed(self._state, sort_by)
        return self.load()

    # --- local-only inputs ---

    def set_search(self, search_term: str) -> BoardPageState:
        self._state = st.search_changed(self._state, search_term)
        return self._state

    def open_post_form(self) -> BoardPageState:
        self._state = st.post_form_toggled(self._state, True)
        return self._state

    # --- child collaborator callbacks ---
    # The vote widget and submission form run in the browser; these are the
    # server-side counterparts they report back through.

    def on_vote_change(self, post_id: str, vote_count: int, user_voted: bool) -> BoardPageState:
        """Patch one post's vote count and voted flag without reloading."""
        self._state = st.vote_changed(self._state, post_id, vote_count, user_voted)
        return self._state

    def on_notification(self, message: str, kind: str) -> None:
        """Forward a widget toast; unknown kinds are shown as info."""
        self._notify(message, notification_kind(kind))

    def on_post_submitted(self) -> BoardPageState:
        return self.load()
