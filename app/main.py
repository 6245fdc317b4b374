# app/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import routes_draft, routes_league, routes_plans, routes_players
from app.core.config import settings
from app.core.errors import DraftError
from app.core.logging import configure_logging
from app.db.engine import engine
from app.db.models import Base
from app.middleware.request_log import RequestLogMiddleware

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_at_startup()
    Base.metadata.create_all(bind=engine)
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.APP_ENV)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.add_middleware(RequestLogMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1):5173$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)


@app.exception_handler(DraftError)
async def _draft_error(request: Request, exc: DraftError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# Routers
app.include_router(routes_league.router)
app.include_router(routes_players.router)
app.include_router(routes_draft.router)
app.include_router(routes_plans.router)


@app.get("/health")
def health():
    return {"ok": True, "env": settings.APP_ENV}


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.IS_LOCAL)


if __name__ == "__main__":
    run()
