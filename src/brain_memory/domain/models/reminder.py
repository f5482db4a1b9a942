"""Reminder models."""

from typing import Literal

from pydantic import BaseModel, Field

from .base import Priority


class SetReminderRequest(BaseModel):
    task_type: str = Field(min_length=1, description="Task type identifier, e.g. 'k8s-deployment'")
    reminder: str = Field(min_length=1)
    priority: Priority = Priority.INFO


class CheckRemindersRequest(BaseModel):
    task_type: str = Field(min_length=1)


class ReminderRecord(BaseModel):
    reminder_id: str
    content: str
    priority: Priority
    created_at: str


class SetReminderResult(BaseModel):
    status: Literal["ok"] = "ok"
    reminder_id: str


class ReminderList(BaseModel):
    task_type: str
    reminders: list[ReminderRecord]
    count: int
