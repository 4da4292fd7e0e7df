from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from slot_scheduler.defaults import default_schedule
from slot_scheduler.models import Schedule, ScheduleSlot

logger = logging.getLogger(__name__)

SCHEDULE_STORE_PATH = os.getenv("SCHEDULE_STORE_PATH", "data/schedules.json")

SLOT_ACTIONS = {"add", "update", "delete"}


class ScheduleNotFoundError(LookupError):
    pass


class ScheduleStoreError(ValueError):
    """The store file exists but cannot be read back as schedules."""


class ScheduleStore:
    """
    JSON-file repository of day templates.

    Exactly one stored schedule is the default: save() clears the flag on the
    others before writing one that claims it.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or SCHEDULE_STORE_PATH)

    def load_all(self) -> List[Schedule]:
        """
        Load all stored schedules. Returns [] if the file is missing.

        Raises ScheduleStoreError for an unreadable file, so that writes never
        rebuild the file from a partial view and drop the other schedules.
        """
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [Schedule.model_validate(s) for s in data.get("schedules", [])]
        except Exception as e:
            raise ScheduleStoreError(f"Unreadable schedule store {self.path}: {e}") from e

    def load_default(self) -> Schedule:
        """
        The stored default schedule, or the built-in template if none is
        stored or the store cannot be read.
        """
        try:
            schedules = self.load_all()
        except ScheduleStoreError as e:
            logger.warning(f"Serving built-in schedule: {e}")
            return default_schedule()

        for schedule in schedules:
            if schedule.is_default:
                return schedule
        return default_schedule()

    def save(self, schedule: Schedule) -> Schedule:
        """
        Create or replace a schedule by name.
        """
        schedules = self.load_all()
        stored = schedule.model_copy(update={"is_temporary": False})

        if stored.is_default:
            schedules = [s.model_copy(update={"is_default": False}) for s in schedules]

        for i, existing in enumerate(schedules):
            if existing.name == stored.name:
                schedules[i] = stored
                break
        else:
            schedules.append(stored)

        self._write(schedules)
        return stored

    def update_slot(
        self,
        action: str,
        slot: Union[ScheduleSlot, Dict[str, Any], None] = None,
        slot_index: Optional[int] = None,
    ) -> Schedule:
        """
        Add, update or delete one slot of the stored default schedule.

        "update" merges a partial dict (or a slot's explicitly set fields)
        over the existing slot; "add" also accepts a dict document.
        """
        if action not in SLOT_ACTIONS:
            raise ValueError(f"Invalid action {action!r}. Use 'add', 'update', or 'delete'")

        schedules = self.load_all()
        idx = next((i for i, s in enumerate(schedules) if s.is_default), None)
        if idx is None:
            raise ScheduleNotFoundError("No default schedule found")

        schedule = schedules[idx]
        slots = list(schedule.slots)

        if action == "add":
            if slot is None:
                raise ValueError("slot is required for 'add'")
            slots.append(slot if isinstance(slot, ScheduleSlot) else ScheduleSlot.model_validate(slot))
        else:
            if slot_index is None or not 0 <= slot_index < len(slots):
                raise IndexError(f"Invalid slot index {slot_index}")
            if action == "update":
                if slot is None:
                    raise ValueError("slot is required for 'update'")
                patch = _field_names(slot) if isinstance(slot, dict) else slot.model_dump(exclude_unset=True)
                merged = {**slots[slot_index].model_dump(), **patch}
                slots[slot_index] = ScheduleSlot.model_validate(merged)
            else:
                del slots[slot_index]

        schedules[idx] = schedule.model_copy(update={"slots": slots})
        self._write(schedules)
        return schedules[idx]

    def delete_default(self) -> Schedule:
        """
        Remove stored default schedules; the built-in template applies again.
        """
        remaining = [s for s in self.load_all() if not s.is_default]
        self._write(remaining)
        return default_schedule()

    def _write(self, schedules: List[Schedule]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "schedules": [
                s.model_dump(by_alias=True, exclude={"is_temporary"}) for s in schedules
            ]
        }
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def _field_names(patch: Dict[str, Any]) -> Dict[str, Any]:
    """Key a slot patch by field name, whether it uses camelCase aliases or not."""
    by_alias = {info.alias: name for name, info in ScheduleSlot.model_fields.items() if info.alias}
    return {by_alias.get(k, k): v for k, v in patch.items()}
