"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cli.logging_config import setup_logging_from_config
from coach import ResponseSelector
from observability import log_run_summary
from store import StoreHandle
from web.deps import get_config
from web.routes import auth, chat, stats, tasks

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging_from_config(config)
    # No connection yet: the handle connects on the first request that needs it.
    app.state.store = StoreHandle.for_path(config.store.db_path)
    app.state.selector = ResponseSelector.from_config(config)
    logger.info(
        "web.startup",
        db_path=str(config.store.db_path),
        primary_model=config.llm.model,
        local_llm=config.local_llm.enabled,
    )
    yield
    app.state.store.close()
    log_run_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="FITOX",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Mount routes
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(stats.router)
app.include_router(chat.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
