"""SMTP notifier delivering one HTML message to every recipient."""
from __future__ import annotations

import smtplib
from email.message import EmailMessage
from typing import Optional, Sequence

from loguru import logger

from ..errors import NotificationDeliveryError


class SmtpNotifier:
    def __init__(
        self,
        host: str = "localhost",
        port: int = 587,
        sender: str = "no-reply@localhost",
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, recipients: Sequence[str], subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def send(self, recipients: Sequence[str], subject: str, html: str) -> None:
        msg = self.build_message(recipients, subject, html)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg, from_addr=self.sender, to_addrs=list(recipients))
        except (smtplib.SMTPException, OSError) as e:
            logger.error("smtp delivery to {} failed: {}", msg["To"], e)
            raise NotificationDeliveryError(f"failed to send notification: {e}") from e
        logger.info("smtp delivered {!r} to {} recipient(s)", subject, len(recipients))
