"""SQLAlchemy-backed Paper repository returning dataclasses."""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.paper import PaperModel
from ...domain.paper import Paper, Slot, Stage
from ...errors import DuplicateKey, NotFound, StoreError


def _to_dc(m: PaperModel) -> Paper:
    return Paper(
        id=m.id,
        paper_id=m.paper_id,
        title=m.title,
        domain=m.domain or "",
        status=Stage(m.status),
        slots=[Slot.from_dict(s) for s in (m.slots or [])],
    )


def _slots_json(paper: Paper) -> list:
    return [s.to_dict() for s in paper.slots]


class PaperRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> List[Paper]:
        stmt: Select = select(PaperModel).order_by(PaperModel.created_at.desc())
        try:
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]
        except SQLAlchemyError as e:
            raise StoreError(f"failed to list papers: {e}") from e

    def list_with_all_slots_filled(self) -> List[Paper]:
        # slots are a JSON document, so the filter runs on the mapped dataclasses
        return [p for p in self.list() if p.has_full_slate()]

    def get(self, paper_uuid: str) -> Optional[Paper]:
        try:
            m = self.session.get(PaperModel, paper_uuid)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to load paper {paper_uuid}: {e}") from e
        return _to_dc(m) if m else None

    def get_by_paper_id(self, paper_id: str) -> Optional[Paper]:
        stmt = select(PaperModel).where(PaperModel.paper_id == paper_id).limit(1)
        try:
            m = self.session.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to load paper {paper_id}: {e}") from e
        return _to_dc(m) if m else None

    def create(self, data: Paper) -> Paper:
        if self.get_by_paper_id(data.paper_id) is not None:
            raise DuplicateKey(f"paperId {data.paper_id!r} already exists")
        m = PaperModel(
            id=data.id or str(uuid.uuid4()),
            paper_id=data.paper_id,
            title=data.title,
            domain=data.domain or "",
            status=Stage(data.status).value,
            slots=_slots_json(data),
        )
        try:
            self.session.add(m)
            self.session.commit()
            self.session.refresh(m)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"paperId {data.paper_id!r} already exists") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"failed to create paper: {e}") from e
        return _to_dc(m)

    def save(self, paper: Paper) -> Paper:
        """Overwrite the stored document with ``paper`` (last write wins)."""
        if not paper.id:
            raise NotFound("Paper not found")
        try:
            m = self.session.get(PaperModel, paper.id)
            if not m:
                raise NotFound("Paper not found")
            m.paper_id = paper.paper_id
            m.title = paper.title
            m.domain = paper.domain
            m.status = Stage(paper.status).value
            # assign a fresh list so the JSON column is flagged dirty
            m.slots = _slots_json(paper)
            self.session.commit()
            self.session.refresh(m)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"paperId {paper.paper_id!r} already exists") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"failed to save paper {paper.id}: {e}") from e
        return _to_dc(m)
