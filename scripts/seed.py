"""Insert sample papers with five empty reviewer slots each.

Papers whose paperId already exists are left untouched.
"""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from loguru import logger  # noqa: E402

from paper_tracker import create_app  # noqa: E402
from paper_tracker.db.repositories.factory import paper_repo  # noqa: E402
from paper_tracker.db.session import db  # noqa: E402
from paper_tracker.domain.lifecycle import default_slots  # noqa: E402
from paper_tracker.errors import DuplicateKey  # noqa: E402
from paper_tracker.services.paper_service import PaperService  # noqa: E402

SAMPLE_PAPERS = [
    ("PAPER001", "Advanced Neural Networks", "AI"),
    ("PAPER002", "Climate Change Impacts", "Environmental Science"),
]


def seed(svc: PaperService) -> int:
    created = 0
    for paper_id, title, domain in SAMPLE_PAPERS:
        try:
            svc.create_paper(paper_id, title, domain, default_slots())
            created += 1
        except DuplicateKey:
            logger.info("{} already present, skipping", paper_id)
    return created


def main() -> None:
    app = create_app()
    with app.app_context():
        session = None
        if app.config["PAPER_REPO_BACKEND"].lower() == "sqlalchemy":
            db.create_all()
            session = db.Session()
        svc = PaperService(paper_repo(session), app.extensions["notifier"])
        count = seed(svc)
        logger.info("seeded {} paper(s)", count)


if __name__ == "__main__":
    main()
