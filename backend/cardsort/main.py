"""CardSort API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, in one place
    - Dataset read and validated once in the lifespan; a bad file aborts startup
    - CORS origins come from settings

Design Decisions:
    - Lifespan over @app.on_event
    - serve() is the cardsort-api console script; uvicorn reads host/port from settings
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardsort.api.error_handlers import register_error_handlers
from cardsort.api.routes import game_lifecycle, game_piles, health
from cardsort.config import get_settings
from cardsort.infrastructure.dataset_catalog import init_catalog
from cardsort.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    catalog = init_catalog(settings)
    logger.info(
        f"CardSort API started: {catalog.rules.category_count} categories "
        f"x {catalog.rules.category_size} cards from {catalog.source}",
    )
    yield
    game_lifecycle.clear_games()
    logger.info("CardSort API shutting down")


app = FastAPI(title="CardSort API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# ─── Routes ──────────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(game_lifecycle.router)
app.include_router(game_piles.router)

register_error_handlers(app)


def serve() -> None:
    settings = get_settings()
    uvicorn.run(
        "cardsort.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
