"""Reminder endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from brain_memory.api.dependencies import get_memory_context
from brain_memory.domain.models import (
    CheckRemindersRequest,
    Priority,
    ReminderList,
    SetReminderRequest,
    SetReminderResult,
)
from brain_memory.services.context import MemoryContext

router = APIRouter()


class ReminderBody(BaseModel):
    reminder: str = Field(min_length=1)
    priority: Priority = Priority.INFO


@router.post("/{task_type}", response_model=SetReminderResult, operation_id="set_reminder")
async def set_reminder(
    task_type: str,
    body: ReminderBody,
    context: MemoryContext = Depends(get_memory_context),
) -> SetReminderResult:
    return await context.reminders.set_reminder(
        SetReminderRequest(task_type=task_type, reminder=body.reminder, priority=body.priority)
    )


@router.get("/{task_type}", response_model=ReminderList, operation_id="check_reminders")
async def check_reminders(
    task_type: str,
    context: MemoryContext = Depends(get_memory_context),
) -> ReminderList:
    return await context.reminders.check_reminders(CheckRemindersRequest(task_type=task_type))
