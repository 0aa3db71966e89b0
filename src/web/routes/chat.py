"""Coach chat routes: reply generation plus best-effort history."""

import structlog
from fastapi import APIRouter, Depends, Query

from coach import ResponseSelector, compute_stats
from store import StoreHandle, list_messages, list_tasks, record_exchange
from store.messages import DEFAULT_SESSION
from web.auth import get_current_user
from web.deps import get_selector, get_store
from web.models import ChatRequest, ChatResponse, MessageListResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
    selector: ResponseSelector = Depends(get_selector),
):
    user_id = user["id"]
    history = [turn.model_dump() for turn in body.messages]

    context = compute_stats(list_tasks(store, user_id))
    reply = await selector.generate_reply(history, context)

    last_user = next((m["content"] for m in reversed(history) if m["role"] == "user"), None)
    saved = record_exchange(
        store,
        user_id,
        body.session_id,
        message=last_user,
        response=reply.content,
        source=reply.source,
    )
    logger.info(
        "chat.exchange",
        user_id=user_id,
        session_id=body.session_id,
        turns=len(history),
        source=str(reply.source),
        saved=saved.persisted,
    )
    return ChatResponse(content=reply.content, source=reply.source, saved=saved.persisted)


@router.get("/messages", response_model=MessageListResponse)
async def get_messages(
    session_id: str = Query(DEFAULT_SESSION, alias="sessionId", max_length=100),
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
):
    return MessageListResponse(messages=list_messages(store, user["id"], session_id))
