"""Repository factory for Paper (sqlalchemy|supabase).

Arguments left as ``None`` are read from the active Flask app's config.
"""
from __future__ import annotations

from typing import Optional, Union

from flask import current_app
from sqlalchemy.orm import Session
from supabase import Client

from .paper_repo import PaperRepository as SQLARepo
from .paper_repo_supabase import PaperRepositorySupabase
from ...integrations.supabase_client import supabase_ext

BACKENDS = ("sqlalchemy", "supabase")


def paper_repo(
    session: Optional[Session] = None,
    *,
    backend: Optional[str] = None,
    client: Optional[Client] = None,
    table: Optional[str] = None,
) -> Union[SQLARepo, PaperRepositorySupabase]:
    if backend is None:
        backend = current_app.config.get("PAPER_REPO_BACKEND") or "sqlalchemy"
    backend = backend.lower()
    if backend not in BACKENDS:
        raise RuntimeError(f"unsupported paper repository backend: {backend}")

    if backend == "supabase":
        client = client or supabase_ext.service or supabase_ext.anon
        if client is None:
            raise RuntimeError("Supabase client is not initialized; set SUPABASE_URL and a key.")
        if table is None:
            table = current_app.config.get("SUPABASE_TABLE", "papers")
        return PaperRepositorySupabase(client, table)

    if session is None:
        raise RuntimeError("SQLAlchemy repo requires a session")
    return SQLARepo(session)
