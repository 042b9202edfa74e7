"""Pydantic request/response schemas for Papers API.

Field names are camelCase on the wire; snake_case is accepted on input too.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.paper import Stage


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SlotIn(_WireModel):
    slot_number: str = Field(..., min_length=1, max_length=50)
    email: str = ""
    is_filled: bool = False


class PaperCreateIn(_WireModel):
    # blank values are rejected by PaperService so they map to the same error
    paper_id: str = Field(default="", max_length=200)
    title: str = Field(default="", max_length=500)
    domain: str = Field(default="", max_length=200)
    slots: Optional[List[SlotIn]] = None


class FillSlotIn(_WireModel):
    slot_number: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=1, max_length=320)


class StageUpdateIn(_WireModel):
    # any JSON value; the service rejects non-advanceable targets as invalid_stage
    stage: Any = None


class SlotOut(_WireModel):
    slot_number: str
    email: str
    is_filled: bool


class PaperOut(_WireModel):
    id: str
    paper_id: str
    title: str
    domain: str
    status: Stage
    slots: List[SlotOut]


class StageUpdateOut(_WireModel):
    message: str
    paper: PaperOut
    status_persisted: bool
    notification: str
