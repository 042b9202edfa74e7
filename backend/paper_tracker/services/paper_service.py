"""Paper service encapsulating the review lifecycle rules.

Every operation loads the paper fresh, mutates it in memory and writes the
whole document back. There is no locking, so concurrent writers to the same
paper race and the last save wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Protocol

from loguru import logger

from ..domain import lifecycle
from ..domain.paper import Paper, Slot, Stage
from ..errors import NotFound, NotificationDeliveryError, SlotsIncomplete, ValidationError
from ..notifications.core import Notifier
from ..notifications.templates import render_stage_email


class PaperStore(Protocol):
    def list(self) -> List[Paper]: ...
    def list_with_all_slots_filled(self) -> List[Paper]: ...
    def get(self, paper_uuid: str) -> Optional[Paper]: ...
    def get_by_paper_id(self, paper_id: str) -> Optional[Paper]: ...
    def create(self, data: Paper) -> Paper: ...
    def save(self, paper: Paper) -> Paper: ...


class NotificationOutcome(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(slots=True)
class StageAdvanceResult:
    message: str
    paper: Paper
    status_persisted: bool
    notification: NotificationOutcome


class PaperService:
    def __init__(self, repo: PaperStore, notifier: Notifier, *, strict_sequence: bool = False) -> None:
        self.repo = repo
        self.notifier = notifier
        self.strict_sequence = strict_sequence

    def list_papers(self) -> List[Paper]:
        return self.repo.list()

    def list_papers_with_all_slots_filled(self) -> List[Paper]:
        return self.repo.list_with_all_slots_filled()

    def get_paper(self, paper_uuid: str) -> Paper:
        paper = self.repo.get(paper_uuid)
        if paper is None:
            raise NotFound("Paper not found")
        return paper

    def create_paper(
        self,
        paper_id: str,
        title: str,
        domain: str = "",
        slots: Optional[Iterable[Slot]] = None,
    ) -> Paper:
        if not paper_id or not paper_id.strip():
            raise ValidationError("paperId is required")
        if not title or not title.strip():
            raise ValidationError("title is required")
        paper = Paper(
            id=None,
            paper_id=paper_id,
            title=title,
            domain=domain or "",
            status=Stage.PENDING,
            slots=list(slots or []),
        )
        created = self.repo.create(paper)
        logger.info("created paper {} ({}) with {} slot(s)", created.paper_id, created.id, len(created.slots))
        return created

    def fill_slot(self, paper_uuid: str, slot_number: str, email: str) -> Paper:
        if not slot_number:
            raise ValidationError("slotNumber is required")
        if not email:
            raise ValidationError("email is required")
        paper = self.get_paper(paper_uuid)
        previous = paper.find_slot(slot_number)
        if previous is not None and previous.is_filled and previous.email != email:
            logger.info("slot {} of paper {} reassigned from {} to {}", slot_number, paper.paper_id, previous.email, email)
        appended = lifecycle.fill_slot(paper, slot_number, email)
        saved = self.repo.save(paper)
        logger.info(
            "slot {} of paper {} {} for {}",
            slot_number,
            paper.paper_id,
            "appended" if appended else "filled",
            email,
        )
        return saved

    def advance_stage(self, paper_uuid: str, target_stage: object) -> StageAdvanceResult:
        stage = lifecycle.parse_target(target_stage)
        paper = self.get_paper(paper_uuid)
        stage = lifecycle.validate_target(paper.status, stage, strict=self.strict_sequence)

        if not paper.all_slots_filled():
            open_slots = [s.slot_number for s in paper.slots if not s.is_filled]
            logger.warning("paper {} cannot move to {}: open slots {}", paper.paper_id, stage.value, open_slots)
            raise SlotsIncomplete("Not all slots are filled", payload={"openSlots": open_slots})

        paper.status = stage
        paper = self.repo.save(paper)
        logger.info("paper {} moved to {}", paper.paper_id, stage.value)

        recipients = paper.slot_emails()
        if not recipients:
            logger.info("paper {} has no slots, skipping notification", paper.paper_id)
            return StageAdvanceResult(
                message=f"Paper status updated to {stage.value}, but no users to notify",
                paper=paper,
                status_persisted=True,
                notification=NotificationOutcome.SKIPPED,
            )

        email = render_stage_email(paper, stage)
        try:
            self.notifier.send(recipients, email.subject, email.html)
        except NotificationDeliveryError as e:
            self._delivery_failed(e, paper, stage)
            raise
        except Exception as e:
            err = NotificationDeliveryError(f"failed to send notification: {e}")
            self._delivery_failed(err, paper, stage)
            raise err from e
        return StageAdvanceResult(
            message=f"Paper status updated to {stage.value} and notifications sent",
            paper=paper,
            status_persisted=True,
            notification=NotificationOutcome.SENT,
        )

    @staticmethod
    def _delivery_failed(err: NotificationDeliveryError, paper: Paper, stage: Stage) -> None:
        # the status change is already persisted at this point
        err.paper = paper
        err.payload.setdefault("statusPersisted", True)
        err.payload.setdefault("notification", NotificationOutcome.FAILED.value)
        logger.error("paper {} moved to {} but notification failed: {}", paper.paper_id, stage.value, err.message)
