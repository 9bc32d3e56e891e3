"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint, current_app

from ...db.repositories.factory import feedback_repo
from ...errors import DatabaseUnavailable, fail, ok
from ...integrations.supabase_client import supabase_ext


bp = Blueprint("health", __name__)


@bp.get("/")
def alive():
    return ok({"status": "ok"})


@bp.get("/supabase")
def supabase_status():
    return ok({
        "anon_initialized": supabase_ext.anon is not None,
        "service_initialized": supabase_ext.service is not None,
    })


@bp.get("/backend")
def backend_status():
    backend = current_app.config.get("FEEDBACK_REPO_BACKEND")
    try:
        feedback_repo()
    except DatabaseUnavailable as e:
        return fail("service_unavailable", f"{backend}: {e}", 503)
    return ok({"backend": backend, "available": True})
