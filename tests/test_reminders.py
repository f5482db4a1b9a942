from datetime import timedelta

import pytest

from brain_memory.domain.models import CheckRemindersRequest, Priority, SetReminderRequest
from brain_memory.services.reminders import new_reminder_id
from tests.conftest import FIXED_NOW


async def add(context, text, priority=Priority.INFO, task_type="deploy"):
    return await context.reminders.set_reminder(
        SetReminderRequest(task_type=task_type, reminder=text, priority=priority)
    )


async def test_set_and_check(context):
    result = await add(context, "check the changelog")

    listing = await context.reminders.check_reminders(CheckRemindersRequest(task_type="deploy"))

    assert result.status == "ok"
    assert listing.count == 1
    assert listing.reminders[0].reminder_id == result.reminder_id
    assert listing.reminders[0].content == "check the changelog"
    assert listing.reminders[0].created_at == FIXED_NOW.isoformat()


async def test_ordered_by_priority_then_age(context, clock):
    await add(context, "info old", Priority.INFO)
    clock.now = FIXED_NOW + timedelta(minutes=1)
    await add(context, "critical new", Priority.CRITICAL)
    await add(context, "important", Priority.IMPORTANT)
    clock.now = FIXED_NOW - timedelta(minutes=1)
    await add(context, "critical old", Priority.CRITICAL)

    listing = await context.reminders.check_reminders(CheckRemindersRequest(task_type="deploy"))

    assert [r.content for r in listing.reminders] == ["critical old", "critical new", "important", "info old"]


async def test_task_types_are_separate(context):
    await add(context, "a", task_type="deploy")
    await add(context, "b", task_type="migration")

    listing = await context.reminders.check_reminders(CheckRemindersRequest(task_type="migration"))

    assert [r.content for r in listing.reminders] == ["b"]


async def test_unknown_task_type_is_empty(context):
    listing = await context.reminders.check_reminders(CheckRemindersRequest(task_type="never-set"))

    assert listing.reminders == []
    assert listing.count == 0


async def test_same_instant_reminders_get_distinct_ids(context):
    first = await add(context, "one")
    second = await add(context, "two")

    assert first.reminder_id != second.reminder_id


def test_reminder_id_carries_millisecond_timestamp():
    reminder_id = new_reminder_id(FIXED_NOW)
    assert reminder_id.startswith(f"r_{int(FIXED_NOW.timestamp() * 1000)}_")


def test_unknown_priority_is_rejected():
    with pytest.raises(ValueError):
        SetReminderRequest(task_type="deploy", reminder="x", priority="urgent")
