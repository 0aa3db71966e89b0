"""Task CRUD routes. Work in degraded mode with an explicit ``saved`` flag."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from store import StoreHandle, create_task, delete_task, list_tasks, new_task, update_task
from web.auth import get_current_user
from web.deps import get_store
from web.models import (
    TaskCreate,
    TaskDeleteResponse,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
async def get_tasks(
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
):
    return TaskListResponse(tasks=list_tasks(store, user["id"]))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def add_task(
    body: TaskCreate,
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
):
    task = new_task(
        user["id"],
        title=body.title,
        category=body.category,
        priority=body.priority,
        due_date=body.due_date,
    )
    result = create_task(store, task)
    logger.info("task.created", user_id=user["id"], task_id=task["id"], saved=result.persisted)
    return TaskResponse(task=result.document, saved=result.persisted)


@router.put("/{task_id}", response_model=TaskResponse)
async def edit_task(
    task_id: str,
    body: TaskUpdate,
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
):
    # Explicit nulls never clear a stored field
    patch = {k: v for k, v in body.model_dump(exclude_unset=True, mode="json").items() if v is not None}
    result = update_task(store, user["id"], task_id, patch)
    if not result.found:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse(task=result.document, saved=result.persisted)


@router.delete("/{task_id}", response_model=TaskDeleteResponse)
async def remove_task(
    task_id: str,
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
):
    result = delete_task(store, user["id"], task_id)
    if not result.found:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskDeleteResponse(success=True, deleted=result.persisted)
