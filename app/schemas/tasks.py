from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.base import PyObjectId
from app.models.tasks import TaskPriority, TaskStatus
from app.models.user import Role


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _TaskFields(_CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, value):
        # the web client sends "" for untouched inputs
        if isinstance(value, str) and value == "":
            return None
        return value


class TaskCreate(_TaskFields):
    """New task. Title and description are checked by the access rules, not here."""


class TaskUpdate(_TaskFields):
    """Partial update. Only fields carrying a value are applied."""


class UserRef(_CamelModel):
    id: PyObjectId = Field(alias="_id")
    name: str
    email: str


class UserOut(UserRef):
    role: Role


class TaskOut(_CamelModel):
    id: PyObjectId = Field(alias="_id")
    title: str
    description: str
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    created_by: Optional[UserRef] = None
    assigned_to: Optional[UserRef] = None
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str


class TaskMessage(MessageResponse):
    task: TaskOut
