"""Board page, JSON view and submission against the SQLAlchemy backend."""
from __future__ import annotations

from types import SimpleNamespace

from feedboard import create_app
from feedboard.db.models.feedback import CommentModel, PostModel
from feedboard.db.session import db as database
from feedboard.integrations.supabase_client import supabase_ext
from tests.conftest import SupabaseTestingConfig, auth_headers


def _flashes(client):
    with client.session_transaction() as sess:
        return list(sess.get("_flashes", []))


def _ids(resp):
    return [p["id"] for p in resp.get_json()["data"]["posts"]]


def test_api_lists_posts_by_votes_without_duplicates(client, seed_board):
    resp = client.get("/api/boards/acme/posts")
    assert resp.status_code == 200, resp.text
    data = resp.get_json()["data"]
    assert data["project"] == {"id": "proj-1", "name": "Acme", "slug": "acme"}
    assert data["board_id"] == "board-1"
    assert [(p["id"], p["vote_count"]) for p in data["posts"]] == [("p3", 5), ("p1", 2), ("p2", 0)]
    assert data["posts"][1]["comment_count"] == 3
    assert all(p["user_voted"] is False for p in data["posts"])


def test_api_sorts_by_creation_time(client, seed_board):
    assert _ids(client.get("/api/boards/acme/posts?sort=newest")) == ["p2", "p1", "p3"]
    assert _ids(client.get("/api/boards/acme/posts?sort=oldest")) == ["p3", "p1", "p2"]


def test_api_status_filter_and_search(client, seed_board):
    assert _ids(client.get("/api/boards/acme/posts?status=planned")) == ["p1"]
    assert _ids(client.get("/api/boards/acme/posts?q=dark")) == ["p1"]
    assert _ids(client.get("/api/boards/acme/posts?q=CSV")) == ["p2"]


def test_api_rejects_unknown_status(client, seed_board):
    resp = client.get("/api/boards/acme/posts?status=archived")
    assert resp.status_code == 422


def test_api_not_found_paths(client, seed_board):
    project = client.get("/api/boards/missing/posts")
    assert project.status_code == 404
    assert project.get_json()["message"] == "Project not found"

    board = client.get("/api/boards/orphan/posts")
    assert board.status_code == 404
    assert board.get_json()["message"] == "Board not found"


def test_page_renders_posts(client, seed_board):
    resp = client.get("/acme/board")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Acme Feedback" in html
    assert "Dark mode" in html
    assert "Dark theme please" not in html
    assert "Planned" in html
    assert "Anonymous" in html
    assert "3 comments" in html
    assert "Sign Out" not in html
    assert 'role="dialog"' not in html


def test_page_search_shows_empty_state(client, seed_board):
    html = client.get("/acme/board?q=zzz").get_data(as_text=True)
    assert "No feedback yet" in html
    assert "Load More Feedback" not in html


def test_unknown_project_redirects_home(client, seed_board):
    resp = client.get("/missing/board")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")
    assert ("error", "Project not found") in _flashes(client)


def test_missing_board_cannot_open_submission(client, seed_board):
    resp = client.get("/orphan/board?submit=1")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert 'role="dialog"' not in html
    # flashed toast is rendered into the page
    assert "Board not found" in html


def test_submission_modal_mounts_with_board(client, seed_board):
    html = client.get("/acme/board?submit=1").get_data(as_text=True)
    assert 'role="dialog"' in html
    assert 'name="board_id" value="board-1"' in html


def test_signed_in_user_sees_email_and_settings(app, client, seed_board):
    html = client.get("/acme/board", headers=auth_headers(app, "alice@example.com")).get_data(as_text=True)
    assert "alice@example.com" in html
    assert "Sign Out" in html
    assert "/acme/settings" in html


def test_submission_creates_post_and_reloads_board(app, client, seed_board, db):
    resp = client.post(
        "/acme/board/posts?status=all&sort=newest",
        data={"board_id": "board-1", "title": "  Webhooks  ", "description": ""},
        headers=auth_headers(app, "alice@example.com"),
    )
    assert resp.status_code == 302
    assert "/acme/board" in resp.headers["Location"]
    assert ("success", "Feedback submitted") in _flashes(client)

    created = db.query(PostModel).filter_by(title="Webhooks").one()
    assert created.author_email == "alice@example.com"
    assert created.status == "open"
    assert created.description is None

    assert "Webhooks" in client.get("/acme/board").get_data(as_text=True)


def test_submission_rejects_foreign_board(client, seed_board, db):
    resp = client.post("/acme/board/posts", data={"board_id": "board-x", "title": "Nope"})
    assert resp.status_code == 302
    assert ("error", "Board not found") in _flashes(client)
    assert db.query(PostModel).filter_by(title="Nope").count() == 0


def test_submission_validates_title(client, seed_board):
    resp = client.post("/acme/board/posts", data={"board_id": "board-1", "title": "   "})
    assert resp.status_code == 422


def test_sign_out_clears_cookie_and_redirects_home(app, client):
    resp = client.post("/auth/sign-out", headers=auth_headers(app))
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")
    assert any(c.startswith("sb-access-token=;") for c in resp.headers.getlist("Set-Cookie"))


def test_missing_supabase_client_shows_inline_error():
    app = create_app(SupabaseTestingConfig)
    client = app.test_client()

    page = client.get("/acme/board")
    assert page.status_code == 503
    assert "Database connection not available" in page.get_data(as_text=True)

    api = client.get("/api/boards/acme/posts")
    assert api.status_code == 503

    submit = client.post("/acme/board/posts", data={"board_id": "b", "title": "t"})
    assert submit.status_code == 503


def test_health_and_docs(client):
    assert client.get("/api/health/").get_json() == {"data": {"status": "ok"}}
    assert client.get("/api/health/supabase").get_json()["data"]["anon_initialized"] is False
    assert client.get("/api/health/backend").get_json()["data"] == {"backend": "sqlalchemy", "available": True}
    spec = client.get("/openapi.json").get_json()
    assert "/api/boards/{slug}/posts" in spec["paths"]


def test_unknown_project_lands_on_home_with_toast(client, seed_board):
    resp = client.get("/missing/board", follow_redirects=True)
    assert resp.status_code == 200
    assert resp.request.path == "/"
    assert "Project not found" in resp.get_data(as_text=True)


def test_api_posts_query_failure_is_bad_gateway(client, seed_board):
    with database.engine.begin() as conn:
        CommentModel.__table__.drop(conn)

    resp = client.get("/api/boards/acme/posts")
    assert resp.status_code == 502
    assert resp.get_json()["message"] == "Error loading posts"


def test_submission_redirect_keeps_search_term(client, seed_board):
    resp = client.post(
        "/acme/board/posts?q=dark&status=planned&sort=newest",
        data={"board_id": "board-1", "title": "Darker mode"},
    )
    assert resp.status_code == 302
    location = resp.headers["Location"]
    assert "q=dark" in location
    assert "status=planned" in location
    assert "sort=newest" in location


def test_submission_form_carries_search_term(client, seed_board):
    html = client.get("/acme/board?submit=1&q=dark").get_data(as_text=True)
    assert "/acme/board/posts?q=dark" in html


def test_sign_out_lands_on_home(client):
    resp = client.post("/auth/sign-out", follow_redirects=True)
    assert resp.status_code == 200
    assert resp.request.path == "/"


def test_sign_out_failure_stays_on_page(app, client, monkeypatch):
    def fail_sign_out(token):
        raise RuntimeError("auth service down")

    service = SimpleNamespace(auth=SimpleNamespace(admin=SimpleNamespace(sign_out=fail_sign_out)))
    monkeypatch.setattr(supabase_ext.clients, "service", service)

    resp = client.post(
        "/auth/sign-out",
        headers={**auth_headers(app), "Referer": "http://localhost/acme/board"},
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/acme/board")
    assert not any(c.startswith("sb-access-token=") for c in resp.headers.getlist("Set-Cookie"))
