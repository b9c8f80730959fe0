# app/routes/tasks.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.database import get_database
from app.middleware.rbac import get_current_user
from app.models.tasks import TaskStore
from app.models.user import UserStore
from app.schemas.tasks import (
    MessageResponse,
    TaskCreate,
    TaskMessage,
    TaskOut,
    TaskUpdate,
    UserOut,
)
from app.services.task_access import Caller, TaskAccess

task_router = APIRouter(tags=["Tasks"])


def get_task_access(db=Depends(get_database)) -> TaskAccess:
    users = UserStore(db)
    return TaskAccess(TaskStore(db, users), users)


# Admin sees every task, everyone else what they created or were assigned
@task_router.get("", response_model=List[TaskOut])
async def list_tasks(
    caller: Caller = Depends(get_current_user),
    access: TaskAccess = Depends(get_task_access),
):
    return await access.list_tasks(caller)


@task_router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskMessage)
async def create_task(
    data: TaskCreate,
    caller: Caller = Depends(get_current_user),
    access: TaskAccess = Depends(get_task_access),
):
    task = await access.create_task(caller, data)
    return {"message": "Task created successfully", "task": task}


# Admin only: registered users for the assignment picker
@task_router.get("/users", response_model=List[UserOut], tags=["Admin"])
async def list_users(
    caller: Caller = Depends(get_current_user),
    access: TaskAccess = Depends(get_task_access),
):
    return await access.list_users(caller)


@task_router.put("/{task_id}", response_model=TaskMessage)
async def update_task(
    task_id: str,
    data: TaskUpdate,
    caller: Caller = Depends(get_current_user),
    access: TaskAccess = Depends(get_task_access),
):
    task = await access.update_task(caller, task_id, data)
    return {"message": "Task updated successfully", "task": task}


@task_router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    caller: Caller = Depends(get_current_user),
    access: TaskAccess = Depends(get_task_access),
):
    await access.delete_task(caller, task_id)
    return {"message": "Task deleted successfully"}
