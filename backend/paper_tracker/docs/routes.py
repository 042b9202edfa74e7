"""Docs blueprint: /openapi.json, /docs (Swagger UI), /redoc."""
from __future__ import annotations

from flask import Blueprint, Response, jsonify

from .openapi import build_openapi

bp = Blueprint("docs", __name__)

_PAGE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>{title}</title>
  {head}
  <style>body{{margin:0;}}</style>
</head>
<body>
  {body}
</body>
</html>
"""


@bp.get("/openapi.json")
def openapi_json() -> Response:
    return jsonify(build_openapi())


@bp.get("/docs")
def swagger_ui() -> Response:
    html = _PAGE.format(
        title="Paper Review Tracker API",
        head='<link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css" />',
        body=(
            '<div id="swagger-ui" style="height:100vh"></div>\n'
            '  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>\n'
            "  <script>window.ui = SwaggerUIBundle({ url: '/openapi.json', dom_id: '#swagger-ui' });</script>"
        ),
    )
    return Response(html, mimetype="text/html")


@bp.get("/redoc")
def redoc() -> Response:
    html = _PAGE.format(
        title="Paper Review Tracker API (ReDoc)",
        head='<script src="https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js"></script>',
        body='<redoc spec-url="/openapi.json"></redoc>',
    )
    return Response(html, mimetype="text/html")
