"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict

from flask import request

from ..api.papers.schemas import FillSlotIn, PaperCreateIn, PaperOut, StageUpdateIn, StageUpdateOut

_REF = "#/components/schemas/{model}"


def _schemas() -> Dict[str, Any]:
    schemas: Dict[str, Any] = {}
    for model in (PaperCreateIn, FillSlotIn, StageUpdateIn, PaperOut, StageUpdateOut):
        schema = model.model_json_schema(ref_template=_REF, by_alias=True)
        # hoist nested definitions so every $ref resolves under components
        schemas.update(schema.pop("$defs", {}))
        schemas[model.__name__] = schema
    schemas["Error"] = {
        "type": "object",
        "properties": {"error": {"type": "string"}, "message": {"type": "string"}},
        "required": ["error", "message"],
    }
    return schemas


def _body(name: str) -> Dict[str, Any]:
    return {"required": True, "content": {"application/json": {"schema": {"$ref": _REF.format(model=name)}}}}


def _resp(description: str, name: str | None = None) -> Dict[str, Any]:
    if name is None:
        return {"description": description}
    return {"description": description, "content": {"application/json": {"schema": {"$ref": _REF.format(model=name)}}}}


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    uuid_param = [{"name": "paper_uuid", "in": "path", "required": True, "schema": {"type": "string"}}]
    return {
        "openapi": "3.0.3",
        "info": {"title": "Paper Review Tracker API", "version": "1.0.0"},
        "servers": [{"url": base_url}],
        "tags": [{"name": "Health"}, {"name": "Papers"}],
        "paths": {
            "/api/health/": {
                "get": {"tags": ["Health"], "summary": "Liveness probe", "responses": {"200": _resp("OK")}}
            },
            "/api/health/store": {
                "get": {"tags": ["Health"], "summary": "Store and mail status", "responses": {"200": _resp("Status")}}
            },
            "/api/papers/": {
                "get": {"tags": ["Papers"], "summary": "List papers", "responses": {"200": _resp("OK")}},
                "post": {
                    "tags": ["Papers"], "summary": "Create paper",
                    "requestBody": _body("PaperCreateIn"),
                    "responses": {
                        "201": _resp("Created"),
                        "400": _resp("Missing paperId or title", "Error"),
                        "409": _resp("paperId already exists", "Error"),
                    },
                },
            },
            "/api/papers/filled-slots": {
                "get": {"tags": ["Papers"], "summary": "List papers whose slots are all filled", "responses": {"200": _resp("OK")}}
            },
            "/api/papers/{paper_uuid}": {
                "parameters": uuid_param,
                "get": {
                    "tags": ["Papers"], "summary": "Get paper",
                    "responses": {"200": _resp("OK"), "404": _resp("Paper not found", "Error")},
                },
            },
            "/api/papers/{paper_uuid}/update-stage": {
                "parameters": uuid_param,
                "put": {
                    "tags": ["Papers"], "summary": "Advance paper stage and notify reviewers",
                    "requestBody": _body("StageUpdateIn"),
                    "responses": {
                        "200": _resp("Stage updated"),
                        "400": _resp("Invalid stage value", "Error"),
                        "404": _resp("Paper not found", "Error"),
                        "409": _resp("Not all slots are filled", "Error"),
                        "502": _resp("Stage updated but notification failed", "Error"),
                    },
                },
            },
            "/api/papers/{paper_uuid}/fill-slot": {
                "parameters": uuid_param,
                "put": {
                    "tags": ["Papers"], "summary": "Assign a reviewer to a slot",
                    "requestBody": _body("FillSlotIn"),
                    "responses": {
                        "200": _resp("Slot filled"),
                        "400": _resp("Invalid request body", "Error"),
                        "404": _resp("Paper not found", "Error"),
                    },
                },
            },
        },
        "components": {"schemas": _schemas()},
    }
