"""Domain dataclasses for Paper entities (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Stage(str, Enum):
    PENDING = "pending"
    SUBMIT = "submit"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    PUBLISHED = "published"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class Slot:
    slot_number: str
    email: str = ""
    is_filled: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slot":
        """Accept both stored (snake_case) and wire (camelCase) keys."""
        slot_number = data.get("slot_number", data.get("slotNumber"))
        is_filled = data.get("is_filled", data.get("isFilled", False))
        return cls(
            slot_number=str(slot_number or ""),
            email=data.get("email") or "",
            is_filled=bool(is_filled),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"slot_number": self.slot_number, "email": self.email, "is_filled": self.is_filled}


@dataclass(slots=True)
class Paper:
    id: Optional[str]
    paper_id: str
    title: str
    domain: str = ""
    status: Stage = Stage.PENDING
    slots: List[Slot] = field(default_factory=list)

    def find_slot(self, slot_number: str) -> Optional[Slot]:
        for slot in self.slots:
            if slot.slot_number == slot_number:
                return slot
        return None

    def all_slots_filled(self) -> bool:
        # True for an empty slot list; see has_full_slate for the stricter form.
        return all(slot.is_filled for slot in self.slots)

    def has_full_slate(self) -> bool:
        return bool(self.slots) and self.all_slots_filled()

    def slot_emails(self) -> List[str]:
        return [slot.email for slot in self.slots]
