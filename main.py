import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import database
from app import models  # noqa: F401
from app.api import cache, preferences, qr_codes, redirect, templates
from app.core.cache_utils import build_qr_cache
from app.core.config import settings
from seed import seed_demo_data

logger = logging.getLogger(__name__)

default_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
]
env_origins = (
    [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()] if settings.cors_origins else []
)
origins = list({*default_origins, *env_origins})

app = FastAPI(title="QR Forge API", version="0.1.0")

# One cache per process; routers reach it through app.api.deps.get_qr_cache.
app.state.qr_cache = build_qr_cache(settings)
logger.info(
    "QR cache ready (max_size=%s, ttl_ms=%s)",
    app.state.qr_cache.max_size,
    app.state.qr_cache.ttl_ms,
)


def _should_create_all() -> bool:
    env = (settings.app_env or "").lower()
    enable_flag = os.getenv("ENABLE_CREATE_ALL", "").lower() in {"1", "true", "yes"}
    if database.engine.url.get_backend_name() == "sqlite":
        return True
    if env in {"local", "dev", "development"} or enable_flag:
        return True
    return False


@app.on_event("startup")
def on_startup() -> None:
    if _should_create_all():
        try:
            database.Base.metadata.create_all(bind=database.engine)
        except SQLAlchemyError as exc:
            logger.warning("Base.metadata.create_all failed; continuing without fatal error: %s", exc)
    else:
        logger.info(
            "Skipping Base.metadata.create_all on %s (APP_ENV=%s); run alembic upgrade head instead.",
            database.engine.url.get_backend_name(),
            settings.app_env,
        )
    seed_demo_data()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid data", "details": jsonable_encoder(exc.errors())},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(qr_codes.router, prefix="/api", tags=["qr-codes"])
app.include_router(templates.router, prefix="/api", tags=["templates"])
app.include_router(preferences.router, prefix="/api", tags=["preferences"])
app.include_router(cache.router, prefix="/api", tags=["cache"])
app.include_router(redirect.router, tags=["redirect"])


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
