import logging
import os
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import db
from core.log import configure_logging
from news import dependencies as news_dependencies
from news import router as news_router

configure_logging()
logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(_: FastAPI):
    # The DB pool is only needed when news lives in Postgres.
    uses_db = news_dependencies.store_backend() == "postgres"
    if uses_db:
        await db.init_pool()
    logger.info("server_starting store_backend=%s", news_dependencies.store_backend())
    try:
        yield
    finally:
        logger.info("server_stopping")
        if uses_db:
            await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(RequestValidationError)
async def request_decode_failed(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON, wrong JSON types and non-UUID path ids all land here.
    logger.warning("request_decode_failed path=%s errors=%s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Malformed request."},
    )


app.include_router(news_router.router, tags=["news"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "newsapi"}


def run() -> None:
    """
    Serve the API with uvicorn; `HOST`/`PORT` pick the bind address.
    """
    host = os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"
    raw_port = os.environ.get("PORT", "").strip()
    port = int(raw_port) if raw_port.isdigit() else 8080
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
