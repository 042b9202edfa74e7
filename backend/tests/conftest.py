"""Shared fixtures: Flask app on in-memory SQLite, services and fake notifiers.

loguru output is forwarded to the stdlib logging module so pytest's
``caplog`` and log capture see it.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Sequence

import pytest
from loguru import logger

from paper_tracker import create_app
from paper_tracker.config import TestConfig
from paper_tracker.db.repositories.paper_repo import PaperRepository
from paper_tracker.db.session import db
from paper_tracker.errors import NotificationDeliveryError
from paper_tracker.services.paper_service import PaperService

if TYPE_CHECKING:
    from loguru import Message


def logging_sink(message: "Message") -> None:
    record = message.record
    level = logging.getLevelName(record["level"].name)
    if not isinstance(level, int):
        level = logging.INFO
    module_name = record["name"] or "__main__"
    py_logger = logging.getLogger(module_name)
    log_record = py_logger.makeRecord(
        name=module_name,
        level=level,
        fn=record["file"].path if record["file"] else "unknown",
        lno=record["line"],
        msg=record["message"],
        args=(),
        exc_info=None,
        func=record["function"],
    )
    py_logger.handle(log_record)


@pytest.fixture(scope="session", autouse=True)
def configure_loguru_for_pytest() -> None:
    logger.remove()
    logger.add(logging_sink, format="{message}", level="DEBUG")


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: List[dict] = []

    def send(self, recipients: Sequence[str], subject: str, html: str) -> None:
        self.calls.append({"recipients": list(recipients), "subject": subject, "html": html})


class FailingNotifier:
    def __init__(self) -> None:
        self.attempts = 0

    def send(self, recipients: Sequence[str], subject: str, html: str) -> None:
        self.attempts += 1
        raise NotificationDeliveryError("smtp relay refused connection")


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.Session()


@pytest.fixture
def repo(session) -> PaperRepository:
    return PaperRepository(session)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(repo, notifier) -> PaperService:
    return PaperService(repo, notifier)


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()
