"""Feedback board blueprint: the board page, its JSON view and post submission."""
from __future__ import annotations

from dataclasses import asdict
from typing import List, Tuple

from flask import Blueprint, redirect, render_template, request, url_for
from loguru import logger

from ...auth.jwt import current_user
from ...db.repositories.factory import feedback_repo
from ...domain.feedback import SORT_OPTIONS, STATUS_LABELS
from ...errors import RepositoryError, fail, ok
from ...services.board_service import BoardPageController
from ...services.board_state import BoardPageState, LoadStage
from ...services.notifications import Notifier, flash_notifier
from .schemas import BoardPageOut, BoardQueryIn, PostCreateIn, PostOut, ProjectOut


bp = Blueprint("board", __name__)


def _query() -> BoardQueryIn:
    return BoardQueryIn.model_validate(request.args.to_dict())


def _controller(slug: str, query: BoardQueryIn, notify: Notifier = flash_notifier) -> BoardPageController:
    return BoardPageController(
        feedback_repo,
        notify,
        slug,
        status_filter=query.status,
        sort_by=query.sort,
        search_term=query.q,
    )


def _page_out(state: BoardPageState) -> dict:
    posts = state.visible_posts
    return BoardPageOut(
        project=ProjectOut.model_validate(asdict(state.project)) if state.project else None,
        board_id=state.board_id,
        search_term=state.search_term,
        status_filter=state.status_filter,
        sort_by=state.sort_by,
        total=len(posts),
        posts=[PostOut.model_validate(asdict(p)) for p in posts],
    ).model_dump()


@bp.get("/")
def home():
    # landing target for "Project not found" and sign-out; shows pending toasts
    return render_template("home.html")


@bp.get("/<slug>/board")
def board_page(slug: str):
    query = _query()
    ctrl = _controller(slug, query)
    state = ctrl.mount()
    if state.redirect_to:
        return redirect(state.redirect_to)
    if query.submit:
        state = ctrl.open_post_form()

    html = render_template(
        "board/index.html",
        state=state,
        posts=state.visible_posts,
        user=current_user(),
        slug=slug,
        status_labels=STATUS_LABELS,
        sort_options=SORT_OPTIONS,
    )
    return html, 503 if state.error else 200


@bp.get("/api/boards/<slug>/posts")
def board_posts(slug: str):
    messages: List[Tuple[str, str]] = []
    ctrl = _controller(slug, _query(), lambda message, kind="info": messages.append((message, kind)))
    state = ctrl.mount()

    if state.error:
        return fail("service_unavailable", state.error, 503)
    if state.stage is LoadStage.READY:
        return ok(_page_out(state))

    message = messages[-1][0] if messages else "Something went wrong"
    if state.redirect_to or (state.stage is LoadStage.FAILED and state.board_id is None):
        return fail("not_found", message, 404)
    if state.stage is LoadStage.FAILED:
        return fail("bad_gateway", message, 502)
    return fail("internal_server_error", message, 500)


@bp.post("/<slug>/board/posts")
def submit_post(slug: str):
    payload = PostCreateIn.model_validate(request.form.to_dict() or request.get_json(silent=True) or {})
    back = url_for(
        "board.board_page",
        slug=slug,
        q=request.args.get("q") or None,
        status=request.args.get("status", "all"),
        sort=request.args.get("sort", "votes"),
    )

    try:
        repo = feedback_repo()
        project = repo.get_project_by_slug(slug)
        if project is None:
            flash_notifier("Project not found", "error")
            return redirect("/")
        board = repo.get_board_for_project(project.id)
        if board is None or board.id != payload.board_id:
            flash_notifier("Board not found", "error")
            return redirect(back)
        user = current_user()
        post = repo.create_post(
            board.id,
            title=payload.title,
            description=payload.description,
            author_email=user.email if user else None,
        )
    except RepositoryError as e:
        logger.error("Error submitting feedback for {!r}: {}", slug, e)
        flash_notifier("Error submitting feedback", "error")
        return redirect(back)

    logger.info("post {} submitted to board {}", post.id, payload.board_id)
    flash_notifier("Feedback submitted", "success")
    # full reload of the board instead of appending locally
    return redirect(back)
