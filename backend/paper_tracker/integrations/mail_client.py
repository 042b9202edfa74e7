"""Notification sender initialization as a Flask extension."""
from __future__ import annotations

from typing import Optional

from flask import Flask
from loguru import logger

from ..notifications.core import Notifier, get_notifier


class MailExt:
    def __init__(self) -> None:
        self.notifier: Optional[Notifier] = None
        self.backend: Optional[str] = None

    def init_app(self, app: Flask) -> None:
        backend = (app.config.get("MAIL_BACKEND") or "console").lower()
        sender = app.config.get("MAIL_FROM", "no-reply@localhost")
        if backend == "smtp":
            self.notifier = get_notifier(
                "smtp",
                host=app.config.get("SMTP_HOST", "localhost"),
                port=int(app.config.get("SMTP_PORT", 587)),
                sender=sender,
                username=app.config.get("SMTP_USER"),
                password=app.config.get("SMTP_PASSWORD"),
                use_tls=bool(app.config.get("SMTP_USE_TLS", True)),
                timeout=float(app.config.get("SMTP_TIMEOUT", 30)),
            )
        elif backend == "console":
            if not app.config.get("TESTING"):
                logger.warning("MAIL_BACKEND=console: stage notifications are logged, not delivered")
            self.notifier = get_notifier(
                "console",
                sender=sender,
                record=bool(app.config.get("MAIL_RECORD", False)),
                history=int(app.config.get("MAIL_RECORD_HISTORY", 100)),
            )
        else:
            self.notifier = get_notifier(backend, sender=sender)
        self.backend = backend
        app.extensions["notifier"] = self.notifier


mail_ext = MailExt()
