"""Papers blueprint: listing, creation, slot filling and stage updates."""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from flask import Blueprint, current_app, request
from sqlalchemy.orm import Session

from ...db.repositories.factory import paper_repo
from ...db.session import db
from ...domain.paper import Paper, Slot
from ...errors import NotificationDeliveryError, ok
from ...services.paper_service import PaperService
from .schemas import FillSlotIn, PaperCreateIn, PaperOut, StageUpdateIn, StageUpdateOut


bp = Blueprint("papers", __name__)


def _service() -> PaperService:
    session: Session | None = None
    if current_app.config.get("PAPER_REPO_BACKEND", "sqlalchemy").lower() == "sqlalchemy":
        assert db.Session is not None, "DB session is not initialized"
        session = db.Session()
    notifier = current_app.extensions["notifier"]
    return PaperService(
        paper_repo(session),
        notifier,
        strict_sequence=bool(current_app.config.get("STRICT_STAGE_SEQUENCE", False)),
    )


def _out(p: Paper) -> Dict[str, Any]:
    return PaperOut.model_validate(asdict(p)).model_dump(mode="json", by_alias=True)


def _body() -> bytes:
    return request.get_data() or b"{}"


@bp.get("/")
def list_papers():
    svc = _service()
    return ok([_out(p) for p in svc.list_papers()])


@bp.get("/filled-slots")
def list_papers_with_filled_slots():
    svc = _service()
    return ok([_out(p) for p in svc.list_papers_with_all_slots_filled()])


@bp.post("/")
def create_paper():
    payload = PaperCreateIn.model_validate_json(_body())
    slots = None
    if payload.slots is not None:
        slots = [Slot(s.slot_number, s.email, s.is_filled) for s in payload.slots]
    svc = _service()
    created = svc.create_paper(payload.paper_id, payload.title, payload.domain, slots)
    return ok(_out(created), 201)


@bp.get("/<paper_uuid>")
def get_paper(paper_uuid: str):
    svc = _service()
    return ok(_out(svc.get_paper(paper_uuid)))


@bp.put("/<paper_uuid>/update-stage")
def update_stage(paper_uuid: str):
    payload = StageUpdateIn.model_validate_json(_body())
    svc = _service()
    try:
        result = svc.advance_stage(paper_uuid, payload.stage)
    except NotificationDeliveryError as e:
        if e.paper is not None:
            e.payload["paper"] = _out(e.paper)
        raise
    out = StageUpdateOut(
        message=result.message,
        paper=PaperOut.model_validate(asdict(result.paper)),
        status_persisted=result.status_persisted,
        notification=result.notification.value,
    )
    return ok(out.model_dump(mode="json", by_alias=True))


@bp.put("/<paper_uuid>/fill-slot")
def fill_slot(paper_uuid: str):
    payload = FillSlotIn.model_validate_json(_body())
    svc = _service()
    paper = svc.fill_slot(paper_uuid, payload.slot_number, payload.email)
    return ok(_out(paper))
