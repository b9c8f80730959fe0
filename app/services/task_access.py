# app/services/task_access.py
"""Who may see and change which task.

Every rule is expressed as a MongoDB query scoped to the caller, so the store
only ever returns documents the caller is allowed to touch. A task that exists
but belongs to somebody else is reported exactly like a task that does not
exist at all.
"""
import logging
from dataclasses import dataclass
from typing import List

from bson import ObjectId
from pydantic.alias_generators import to_camel

from app.core.error_messages import ErrorResponses
from app.models.base import to_object_id
from app.models.tasks import TaskPriority, TaskStatus, TaskStore
from app.models.user import Role, UserStore
from app.schemas.tasks import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# fields a creator or assignee may change; assignedTo is handled separately
EDITABLE_FIELDS = ("title", "description", "status", "priority", "due_date")


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def oid(self) -> ObjectId:
        return ObjectId(self.user_id)


def visibility_query(caller: Caller) -> dict:
    """Tasks the caller may list or edit."""
    if caller.is_admin:
        return {}
    return {"$or": [{"assignedTo": caller.oid}, {"createdBy": caller.oid}]}


def edit_query(caller: Caller, task_id: ObjectId) -> dict:
    return {"_id": task_id, **visibility_query(caller)}


def delete_query(caller: Caller, task_id: ObjectId) -> dict:
    """Admins delete anything; everyone else only what they created."""
    if caller.is_admin:
        return {"_id": task_id}
    return {"_id": task_id, "createdBy": caller.oid}


def _stored_value(value):
    if isinstance(value, (TaskStatus, TaskPriority)):
        return value.value
    return value


class TaskAccess:
    def __init__(self, tasks: TaskStore, users: UserStore):
        self.tasks = tasks
        self.users = users

    async def list_tasks(self, caller: Caller) -> List[dict]:
        return await self.tasks.find_many(visibility_query(caller))

    async def create_task(self, caller: Caller, payload: TaskCreate) -> dict:
        if not payload.title or not payload.description:
            raise ErrorResponses.MISSING_TASK_FIELDS

        assignee = to_object_id(payload.assigned_to or caller.user_id)
        if assignee is None or not await self.users.exists(assignee):
            raise ErrorResponses.ASSIGNEE_NOT_FOUND

        task = await self.tasks.insert({
            "title": payload.title,
            "description": payload.description,
            "status": _stored_value(payload.status or TaskStatus.PENDING),
            "priority": _stored_value(payload.priority or TaskPriority.MEDIUM),
            "dueDate": payload.due_date,
            "createdBy": caller.oid,
            "assignedTo": assignee,
        })
        logger.info("Task %s created by %s", task["_id"], caller.user_id)
        return task

    async def update_task(self, caller: Caller, task_id: str, patch: TaskUpdate) -> dict:
        oid = to_object_id(task_id)
        current = await self.tasks.find_one(edit_query(caller, oid)) if oid else None
        if current is None:
            raise ErrorResponses.TASK_NOT_FOUND

        changes = {}
        for field in EDITABLE_FIELDS:
            value = getattr(patch, field)
            if value:
                changes[to_camel(field)] = _stored_value(value)

        # reassignment is admin-only; anyone else's assignedTo is dropped
        if patch.assigned_to and caller.is_admin:
            assignee = to_object_id(patch.assigned_to)
            if assignee is None or not await self.users.exists(assignee):
                raise ErrorResponses.ASSIGNEE_NOT_FOUND
            changes["assignedTo"] = assignee
        elif patch.assigned_to:
            logger.debug("Ignoring reassignment of task %s by non-admin %s", task_id, caller.user_id)

        changes = {key: value for key, value in changes.items() if current.get(key) != value}
        if not changes:
            return (await self.tasks.populate([current]))[0]

        task = await self.tasks.update(oid, changes)
        if task is None:
            # deleted between the lookup and the write
            raise ErrorResponses.TASK_NOT_FOUND
        logger.info("Task %s updated by %s (%s)", task_id, caller.user_id, ", ".join(sorted(changes)))
        return task

    async def delete_task(self, caller: Caller, task_id: str):
        oid = to_object_id(task_id)
        if oid is None or not await self.tasks.delete_one(delete_query(caller, oid)):
            raise ErrorResponses.TASK_NOT_FOUND
        logger.info("Task %s deleted by %s", task_id, caller.user_id)

    async def list_users(self, caller: Caller) -> List[dict]:
        if not caller.is_admin:
            raise ErrorResponses.ADMIN_ONLY
        return await self.users.list_public()
