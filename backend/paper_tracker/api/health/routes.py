"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...db.session import db
from ...errors import ok
from ...integrations.supabase_client import supabase_ext


bp = Blueprint("health", __name__)


@bp.get("/")
def alive():
    return ok({"status": "ok"})


@bp.get("/store")
def store_status():
    backend = (current_app.config.get("PAPER_REPO_BACKEND") or "sqlalchemy").lower()
    if backend == "supabase":
        store_ok = supabase_ext.ready
    else:
        try:
            assert db.engine is not None
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            store_ok = True
        except SQLAlchemyError:
            store_ok = False
    return ok({
        "backend": backend,
        "store_ok": store_ok,
        "mail_backend": current_app.config.get("MAIL_BACKEND", "console"),
        "notifier_initialized": current_app.extensions.get("notifier") is not None,
    })
