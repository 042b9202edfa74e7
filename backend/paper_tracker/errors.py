"""Error taxonomy, global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, jsonify
from loguru import logger
from pydantic import ValidationError as PydanticValidationError


class PaperTrackerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    error: str = "internal_server_error"

    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "message": self.message}
        body.update(self.payload)
        return body


class ValidationError(PaperTrackerError):
    status_code = 400
    error = "validation_error"


class InvalidStage(PaperTrackerError):
    status_code = 400
    error = "invalid_stage"


class NotFound(PaperTrackerError):
    status_code = 404
    error = "not_found"


class DuplicateKey(PaperTrackerError):
    status_code = 409
    error = "duplicate_key"


class SlotsIncomplete(PaperTrackerError):
    status_code = 409
    error = "slots_incomplete"


class NotificationDeliveryError(PaperTrackerError):
    """Raised when the mail collaborator fails to deliver.

    When raised from a stage advance the status change has already been
    persisted; ``paper`` then holds the updated paper.
    """

    status_code = 502
    error = "notification_delivery_failed"

    def __init__(self, message: str, *, paper: Any = None, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, payload=payload)
        self.paper = paper


class StoreError(PaperTrackerError):
    status_code = 500
    error = "store_error"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PaperTrackerError)
    def tracker_error(err: PaperTrackerError):  # type: ignore[override]
        if err.status_code >= 500:
            logger.error("{}: {}", err.error, err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(PydanticValidationError)
    def invalid_payload(err: PydanticValidationError):  # type: ignore[override]
        details = [
            {"loc": [str(p) for p in e["loc"]], "message": e["msg"]} for e in err.errors()
        ]
        return jsonify({"error": "validation_error", "message": "invalid request body", "details": details}), 400

    @app.errorhandler(400)
    def bad_request(err: Exception):  # type: ignore[override]
        return jsonify({"error": "bad_request", "message": str(err)}), 400

    @app.errorhandler(404)
    def not_found(err: Exception):  # type: ignore[override]
        return jsonify({"error": "not_found", "message": str(err)}), 404

    @app.errorhandler(422)
    def unprocessable(err: Exception):  # type: ignore[override]
        return jsonify({"error": "unprocessable_entity", "message": str(err)}), 422

    @app.errorhandler(500)
    def internal(err: Exception):  # type: ignore[override]
        return jsonify({"error": "internal_server_error", "message": "unexpected error"}), 500


def ok(data: Any, status: int = 200):
    return jsonify({"data": data}), status
