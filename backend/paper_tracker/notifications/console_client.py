"""Notifier that logs outgoing mail instead of sending it.

Nothing is delivered. With ``record=True`` the most recent ``history``
messages are kept in ``sent`` for inspection.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Sequence

from loguru import logger


@dataclass
class SentMail:
    sender: str
    recipients: List[str]
    subject: str
    html: str


@dataclass
class ConsoleNotifier:
    sender: str = "no-reply@localhost"
    record: bool = False
    history: int = 100
    sent: Deque[SentMail] = field(init=False)

    def __post_init__(self) -> None:
        self.sent = deque(maxlen=self.history)

    def send(self, recipients: Sequence[str], subject: str, html: str) -> None:
        mail = SentMail(self.sender, list(recipients), subject, html)
        if self.record:
            self.sent.append(mail)
        logger.info("mail (not delivered) to={} subject={!r}", ", ".join(mail.recipients), subject)
        logger.debug("mail body:\n{}", html)
