"""Reminder storage: small priority-ordered records per task type."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from brain_memory.core.base import ErrorLevel
from brain_memory.core.decorators import with_error_handling
from brain_memory.core.logging import get_logger
from brain_memory.domain.models import (
    CheckRemindersRequest,
    ReminderList,
    ReminderRecord,
    SetReminderRequest,
    SetReminderResult,
)
from brain_memory.domain.models.utils import utc_now

if TYPE_CHECKING:
    from brain_memory.services import PatternStore

logger = get_logger(__name__)


def new_reminder_id(now: datetime) -> str:
    """Millisecond timestamp plus a random suffix, so same-instant ids differ."""
    return f"r_{int(now.timestamp() * 1000)}_{uuid4().hex[:6]}"


class ReminderService:
    def __init__(self, store: PatternStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def set_reminder(self, request: SetReminderRequest) -> SetReminderResult:
        now = self.clock()
        record = ReminderRecord(
            reminder_id=new_reminder_id(now),
            content=request.reminder,
            priority=request.priority,
            created_at=now.isoformat(),
        )
        await self.store.add_reminder(request.task_type, record.reminder_id, record.model_dump(mode="json"))
        logger.info(f"Reminder {record.reminder_id} set for {request.task_type}", priority=request.priority.value)
        return SetReminderResult(reminder_id=record.reminder_id)

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def check_reminders(self, request: CheckRemindersRequest) -> ReminderList:
        """All reminders for a task type, critical first, then oldest first."""
        records = [ReminderRecord.model_validate(raw) for raw in await self.store.list_reminders(request.task_type)]
        records.sort(key=lambda r: (r.priority.rank, r.created_at))
        return ReminderList(task_type=request.task_type, reminders=records, count=len(records))
