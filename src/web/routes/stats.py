"""Dashboard stats and daily quote."""

from fastapi import APIRouter, Depends

from coach import ResponseSelector, compute_stats
from store import StoreHandle, list_tasks
from web.auth import get_current_user
from web.deps import get_selector, get_store
from web.models import QuoteResponse, StatsResponse

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    user: dict = Depends(get_current_user),
    store: StoreHandle = Depends(get_store),
    selector: ResponseSelector = Depends(get_selector),
):
    context = compute_stats(list_tasks(store, user["id"]))
    quote = await selector.generate_quote()
    return StatsResponse(
        completed_tasks=context.completed_tasks,
        pending_tasks=context.pending_tasks,
        streak=context.streak,
        quote=quote,
    )


@router.get("/quote", response_model=QuoteResponse)
async def get_quote(
    user: dict = Depends(get_current_user),
    selector: ResponseSelector = Depends(get_selector),
):
    return QuoteResponse(quote=await selector.generate_quote())
