"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict
from flask import request

from ..api.board.schemas import BoardPageOut, PostCreateIn, PostOut, ProjectOut


def _schemas() -> Dict[str, Any]:
    return {
        "ProjectOut": ProjectOut.model_json_schema(ref_template="#/components/schemas/{model}"),
        "PostOut": PostOut.model_json_schema(ref_template="#/components/schemas/{model}"),
        "BoardPageOut": BoardPageOut.model_json_schema(ref_template="#/components/schemas/{model}"),
        "PostCreateIn": PostCreateIn.model_json_schema(ref_template="#/components/schemas/{model}"),
    }


def _error(description: str) -> Dict[str, Any]:
    return {"description": description}


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    security_schemes = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    slug_param = {"name": "slug", "in": "path", "required": True, "schema": {"type": "string"}}
    board_query = [
        {"name": "q", "in": "query", "schema": {"type": "string"}, "description": "Case-insensitive title/description search"},
        {"name": "status", "in": "query", "schema": {
            "type": "string", "default": "all",
            "enum": ["all", "open", "planned", "in_progress", "done", "declined"],
        }},
        {"name": "sort", "in": "query", "schema": {"type": "string", "default": "votes", "enum": ["votes", "newest", "oldest"]}},
    ]
    return {
        "openapi": "3.0.3",
        "info": {"title": "Feedboard API", "version": "0.1.0"},
        "servers": [{"url": base_url}],
        "tags": [
            {"name": "Health"},
            {"name": "Board"},
            {"name": "Auth"},
        ],
        "paths": {
            "/": {
                "get": {"tags": ["Board"], "summary": "Landing page (HTML) with pending toasts", "responses": {"200": {"description": "HTML page"}}}
            },
            "/api/health/": {
                "get": {"tags": ["Health"], "summary": "Liveness probe", "responses": {"200": {"description": "OK"}}}
            },
            "/api/health/supabase": {
                "get": {"tags": ["Health"], "summary": "Supabase client status", "responses": {"200": {"description": "Status"}}}
            },
            "/api/health/backend": {
                "get": {"tags": ["Health"], "summary": "Configured repository backend", "responses": {"200": {"description": "Available"}, "503": _error("Not configured")}}
            },
            "/api/boards/{slug}/posts": {
                "parameters": [slug_param, *board_query],
                "get": {
                    "tags": ["Board"],
                    "summary": "Project, board and filtered posts for a board page",
                    "responses": {
                        "200": {
                            "description": "Board page view",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "object",
                                        "properties": {"data": {"$ref": "#/components/schemas/BoardPageOut"}},
                                    }
                                }
                            },
                        },
                        "404": _error("Project or board not found"),
                        "422": _error("Invalid status filter"),
                        "502": _error("Posts query failed"),
                        "503": _error("Database connection not available"),
                    },
                },
            },
            "/{slug}/board": {
                "parameters": [slug_param, *board_query],
                "get": {
                    "tags": ["Board"],
                    "summary": "Render the feedback board page (HTML)",
                    "responses": {"200": {"description": "HTML page"}, "302": {"description": "Project not found"}},
                },
            },
            "/{slug}/board/posts": {
                "parameters": [slug_param],
                "post": {
                    "tags": ["Board"],
                    "summary": "Submit a feedback post, then reload the board",
                    "requestBody": {"required": True, "content": {
                        "application/x-www-form-urlencoded": {"schema": {"$ref": "#/components/schemas/PostCreateIn"}},
                        "application/json": {"schema": {"$ref": "#/components/schemas/PostCreateIn"}},
                    }},
                    "responses": {"302": {"description": "Redirect to the board page"}},
                },
            },
            "/auth/sign-out": {
                "post": {"tags": ["Auth"], "summary": "Sign out and return to /", "responses": {"302": {"description": "Redirect"}}}
            },
        },
        "components": {
            "schemas": _schemas(),
            "securitySchemes": security_schemes
        },
    }
