"""Pydantic request/response schemas for the web API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared_types import ResponseSource, TaskCategory, TaskPriority

# --- Tasks ---


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    category: TaskCategory = TaskCategory.PERSONAL
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = None


class TaskUpdate(BaseModel):
    """Partial update; only fields sent by the client are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = None
    completed: Optional[bool] = None


class TaskResponse(BaseModel):
    task: dict
    saved: bool = True


class TaskListResponse(BaseModel):
    tasks: list[dict] = []


class TaskDeleteResponse(BaseModel):
    success: bool = True
    deleted: bool


# --- Stats ---


class StatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed_tasks: int = Field(0, serialization_alias="completedTasks")
    pending_tasks: int = Field(0, serialization_alias="pendingTasks")
    streak: int = 0
    quote: str = ""


class QuoteResponse(BaseModel):
    quote: str


# --- Chat ---


class ChatTurn(BaseModel):
    role: str = Field(..., pattern=r"^(user|assistant)$")
    content: str = Field(..., max_length=5000)


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatTurn] = Field(..., min_length=1)
    session_id: str = Field("default", alias="sessionId", max_length=100)


class ChatResponse(BaseModel):
    content: str
    source: ResponseSource
    saved: bool = False


class MessageListResponse(BaseModel):
    messages: list[dict] = []


# --- Auth ---


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None


class AuthUserResponse(BaseModel):
    user: Optional[AuthUser] = None
