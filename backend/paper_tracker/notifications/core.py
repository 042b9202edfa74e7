"""Abstract notification sender interface and factory."""
from __future__ import annotations
from typing import Protocol, Sequence


class Notifier(Protocol):
    def send(self, recipients: Sequence[str], subject: str, html: str) -> None: ...


def get_notifier(kind: str, **kwargs) -> Notifier:
    kind = kind.lower()
    if kind == "smtp":
        from .smtp_client import SmtpNotifier
        return SmtpNotifier(**kwargs)
    if kind == "console":
        from .console_client import ConsoleNotifier
        return ConsoleNotifier(**kwargs)
    raise ValueError(f"unsupported mail backend: {kind}")
