from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linktrack.api import health, links, redirect
from linktrack.core.config import settings
from linktrack.core.logging_config import configure_logging
from linktrack.db.store import RedisStore
from linktrack.services.errors import StorageUnavailable

logger = configure_logging()
logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = RedisStore.from_url(settings.REDIS_URL, settings.REDIS_MAX_CONNECTIONS)
    # ping blocks on the socket, keep it off the event loop
    if not await run_in_threadpool(store.ping):
        logger.warning("Redis is not reachable yet; requests will fail until it is.")
    app.state.store = store
    try:
        yield
    finally:
        logger.info("Shutting down gracefully...")
        await run_in_threadpool(store.close)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="URL shortener with visit analytics",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(links.router)
# Catch-all /{link_id}, keep last
app.include_router(redirect.router)
if settings.STATIC_DIR:
    redirect.mount_dashboard(app, settings.STATIC_DIR)


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error(f"Storage unavailable while serving {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def run():
    import uvicorn

    uvicorn.run("linktrack.main:app", host="0.0.0.0", port=settings.PORT)
