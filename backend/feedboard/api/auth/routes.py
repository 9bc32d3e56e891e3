"""Auth blueprint: sign-out."""
from __future__ import annotations

from flask import Blueprint, current_app, redirect, request
from loguru import logger

from ...auth.jwt import access_token
from ...integrations.supabase_client import supabase_ext


bp = Blueprint("auth", __name__)


@bp.post("/sign-out")
def sign_out():
    token = access_token()
    try:
        if token and supabase_ext.service is not None:
            supabase_ext.service.auth.admin.sign_out(token)
    except Exception as e:
        # sign-out failures are not shown to the user; they stay on the page
        logger.error("Error signing out: {}", e)
        return redirect(request.referrer or "/")

    resp = redirect("/")
    resp.delete_cookie(current_app.config.get("AUTH_COOKIE_NAME", "sb-access-token"))
    return resp
