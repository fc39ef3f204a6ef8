import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.models import GameReply
from routes import admin, games
from services.errors import AllocatorExhausted, Unauthorized
from services.store import GameStore
from services.sweeper import start_sweeper

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    sweeper = start_sweeper(app.state.store, settings)
    app.state.sweeper = sweeper
    try:
        yield
    finally:
        await sweeper.stop()


async def _unauthorized_handler(request: Request, exc: Unauthorized) -> JSONResponse:
    # Rejections look like a missing route, as the relay has always answered them.
    if request.url.path.startswith("/admin"):
        return JSONResponse(status_code=404, content=None)
    reply = GameReply(success=False, error="invalid client auth")
    return JSONResponse(status_code=404, content=reply.model_dump(by_alias=True))


async def _allocator_exhausted_handler(request: Request, exc: AllocatorExhausted) -> JSONResponse:
    logger.error("[games] %s", exc)
    reply = GameReply(success=False, error="could not allocate a game id")
    return JSONResponse(status_code=503, content=reply.model_dump(by_alias=True))


def create_app(settings: Settings | None = None, store: GameStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Turn Relay API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else GameStore()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Unauthorized, _unauthorized_handler)
    app.add_exception_handler(AllocatorExhausted, _allocator_exhausted_handler)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(games.router)
    app.include_router(admin.router)
    return app


app = create_app()
