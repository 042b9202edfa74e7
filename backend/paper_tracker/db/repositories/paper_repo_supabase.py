"""Supabase-backed Paper repository using supabase-py v2."""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from ...domain.paper import Paper, Slot, Stage
from ...errors import DuplicateKey, NotFound, StoreError

UNIQUE_VIOLATION = "23505"


def _row_to_dc(row: Dict[str, Any]) -> Paper:
    return Paper(
        id=str(row.get("id")),
        paper_id=row.get("paper_id", ""),
        title=row.get("title", ""),
        domain=row.get("domain") or "",
        status=Stage(row.get("status") or Stage.PENDING.value),
        slots=[Slot.from_dict(s) for s in (row.get("slots") or [])],
    )


def _dc_to_row(paper: Paper) -> Dict[str, Any]:
    return {
        "paper_id": paper.paper_id,
        "title": paper.title,
        "domain": paper.domain or "",
        "status": Stage(paper.status).value,
        "slots": [s.to_dict() for s in paper.slots],
    }


class PaperRepositorySupabase:
    def __init__(self, client: Client, table: str = "papers") -> None:
        self.client = client
        self.table = client.table(table)

    def _execute(self, query, action: str):
        try:
            return query.execute()
        except APIError as e:
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                raise DuplicateKey(f"paperId already exists: {e.message}") from e
            raise StoreError(f"failed to {action}: {e.message}") from e

    def list(self) -> List[Paper]:
        q = self.table.select("*").order("created_at", desc=True)
        res = self._execute(q, "list papers")
        return [_row_to_dc(r) for r in res.data or []]

    def list_with_all_slots_filled(self) -> List[Paper]:
        return [p for p in self.list() if p.has_full_slate()]

    def get(self, paper_uuid: str) -> Optional[Paper]:
        res = self._execute(self.table.select("*").eq("id", paper_uuid).limit(1), "load paper")
        rows = res.data or []
        return _row_to_dc(rows[0]) if rows else None

    def get_by_paper_id(self, paper_id: str) -> Optional[Paper]:
        res = self._execute(self.table.select("*").eq("paper_id", paper_id).limit(1), "load paper")
        rows = res.data or []
        return _row_to_dc(rows[0]) if rows else None

    def create(self, data: Paper) -> Paper:
        row = {"id": data.id or str(uuid.uuid4()), **_dc_to_row(data)}
        res = self._execute(self.table.insert(row), "create paper")
        created = (res.data or [])[0]
        return _row_to_dc(created)

    def save(self, paper: Paper) -> Paper:
        if not paper.id:
            raise NotFound("Paper not found")
        res = self._execute(self.table.update(_dc_to_row(paper)).eq("id", paper.id), "save paper")
        rows = res.data or []
        if not rows:
            raise NotFound("Paper not found")
        return _row_to_dc(rows[0])
