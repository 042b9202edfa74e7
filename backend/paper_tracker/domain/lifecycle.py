"""Review pipeline rules: stage ordering, advance targets and slot filling.

The pipeline is ``pending -> submit -> reviewing -> accepted -> published``.
``pending`` is initial-only and can never be requested as a target.

By default any target in ``ADVANCE_TARGETS`` is accepted regardless of the
paper's current status, so a paper may jump straight from ``pending`` to
``published``. Passing ``strict=True`` to :func:`validate_target` restricts
advances to the immediate successor of the current status.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import InvalidStage
from .paper import Paper, Slot, Stage

STAGE_ORDER: Tuple[Stage, ...] = (
    Stage.PENDING,
    Stage.SUBMIT,
    Stage.REVIEWING,
    Stage.ACCEPTED,
    Stage.PUBLISHED,
)

ADVANCE_TARGETS = frozenset({Stage.SUBMIT, Stage.REVIEWING, Stage.ACCEPTED, Stage.PUBLISHED})

DEFAULT_SLOT_NUMBERS: Tuple[str, ...] = ("S1", "S2", "S3", "S4", "S5")


def default_slots() -> List[Slot]:
    return [Slot(slot_number=n) for n in DEFAULT_SLOT_NUMBERS]


def next_stage(current: Stage) -> Optional[Stage]:
    idx = STAGE_ORDER.index(current)
    return STAGE_ORDER[idx + 1] if idx + 1 < len(STAGE_ORDER) else None


def parse_target(value: object) -> Stage:
    """Map a requested target onto a Stage, rejecting anything not advanceable."""
    try:
        stage = Stage(value)
    except ValueError:
        raise InvalidStage(f"Invalid stage value: {value!r}") from None
    if stage not in ADVANCE_TARGETS:
        raise InvalidStage(f"Invalid stage value: {value!r}")
    return stage


def validate_target(current: Stage, target: object, *, strict: bool = False) -> Stage:
    stage = parse_target(target)
    if strict and stage != next_stage(current):
        raise InvalidStage(
            f"Cannot move from {current.value} to {stage.value}",
            payload={"current": current.value, "expected": getattr(next_stage(current), "value", None)},
        )
    return stage


def fill_slot(paper: Paper, slot_number: str, email: str) -> bool:
    """Assign ``email`` to ``slot_number`` in place.

    An existing slot is overwritten unconditionally, a missing one is
    appended already filled. Returns True when a slot was appended.
    """
    slot = paper.find_slot(slot_number)
    if slot is None:
        paper.slots.append(Slot(slot_number=slot_number, email=email, is_filled=True))
        return True
    slot.email = email
    slot.is_filled = True
    return False
