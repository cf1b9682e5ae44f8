import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from netview import __version__
from netview.config import settings
from netview.core.errors import register_error_handlers
from netview.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from netview.routers import show
from netview.services import table_fetcher

logger = logging.getLogger("netview")


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Log startup; release store connections on shutdown."""
    logger.info(
        "Starting %s naming_mode=%s redis=%s:%d",
        settings.app_name,
        settings.interface_naming_mode,
        settings.redis_host,
        settings.redis_port,
    )
    yield
    await table_fetcher.get_fetcher().close()
    logger.info("Stopped %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    lifespan=lifespan,
)

# Middleware — last added = outermost = first to execute
app.add_middleware(RequestIDMiddleware)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["x-request-id"],
)

# Error handlers
register_error_handlers(app)

# Routers
app.include_router(show.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.app_name, "version": __version__}
