"""Docs blueprint: /openapi.json and /docs (Swagger UI)."""
from __future__ import annotations

from flask import Blueprint, Response, jsonify, url_for

from .openapi import build_openapi

bp = Blueprint("docs", __name__)

SWAGGER_PAGE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>Feedboard API Docs</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css" />
  <style>body{{margin:0;}} #swagger-ui{{height:100vh;}}</style>
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>window.ui = SwaggerUIBundle({{ url: '{spec_url}', dom_id: '#swagger-ui' }});</script>
</body>
</html>
"""


@bp.get("/openapi.json")
def openapi_json() -> Response:
    return jsonify(build_openapi())


@bp.get("/docs")
def swagger_ui() -> Response:
    return Response(SWAGGER_PAGE.format(spec_url=url_for("docs.openapi_json")), mimetype="text/html")
