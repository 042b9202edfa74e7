"""Supabase client initialization as a Flask extension."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import Flask
from loguru import logger
from supabase import Client, create_client


@dataclass
class _SBClients:
    anon: Optional[Client] = None
    service: Optional[Client] = None


class SupabaseExt:
    def __init__(self) -> None:
        self.clients = _SBClients()

    def init_app(self, app: Flask) -> None:
        self.clients = _SBClients()
        backend = (app.config.get("PAPER_REPO_BACKEND") or "sqlalchemy").lower()
        if backend != "supabase":
            return
        url = app.config.get("SUPABASE_URL")
        anon_key = app.config.get("SUPABASE_ANON_KEY")
        service_key = app.config.get("SUPABASE_SERVICE_ROLE_KEY")
        if url and anon_key:
            self.clients.anon = create_client(url, anon_key)
        if url and service_key:
            self.clients.service = create_client(url, service_key)
        if not self.ready:
            logger.warning("PAPER_REPO_BACKEND=supabase but SUPABASE_URL or keys are missing")

    @property
    def anon(self) -> Optional[Client]:
        return self.clients.anon

    @property
    def service(self) -> Optional[Client]:
        return self.clients.service

    @property
    def ready(self) -> bool:
        return self.service is not None or self.anon is not None


supabase_ext = SupabaseExt()
