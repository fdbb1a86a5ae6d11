import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import ALLOWED_ORIGINS, API_PREFIX, APP_ENV, DATABASE_URL, TZ
from .database import Database
from .domain.clients.router import router as clients_router
from .domain.meetings.router import router as meetings_router
from .domain.notifications.router import router as notifications_router
from .domain.payments.router import payments_router
from .domain.payments.router import router as payment_proofs_router
from .domain.users.router import router as users_router
from .storage import LocalFileStore, build_file_store

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if APP_ENV == "development" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("passlib").setLevel(logging.ERROR)
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    if getattr(app.state, "db", None) is None:
        app.state.db = Database(DATABASE_URL)

    try:
        app.state.db.create_all()
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    logger.info(f"Environment: {APP_ENV} | Timezone: {TZ}")
    yield
    logger.info("Application shutting down...")
    app.state.db.close()


def current_date() -> str:
    """Today's date as YYYY-MM-DD in the configured timezone"""
    return datetime.now(ZoneInfo(TZ)).strftime("%Y-%m-%d")


def create_app(database: Optional[Database] = None, file_store=None) -> FastAPI:
    """Build the API. Tests inject their own database handle and file store."""
    app = FastAPI(title="Closer CRM API", version="1.0.0", lifespan=lifespan)
    app.state.db = database
    app.state.file_store = file_store or build_file_store()

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed or missing fields are reported as 400"""
        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # The cause stays in the server log; clients get a generic message
        logger.exception(f"{request.method} {request.url.path} - Unhandled error: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(users_router)
    api.include_router(clients_router)
    api.include_router(payment_proofs_router)
    api.include_router(payments_router)
    api.include_router(meetings_router)
    api.include_router(notifications_router)
    app.include_router(api)

    # Uploaded payment proofs are served from disk when stored locally
    store = app.state.file_store
    if isinstance(store, LocalFileStore):
        app.mount(store.url_prefix, StaticFiles(directory=str(store.upload_dir)), name="uploads")

    @app.get("/ping")
    def ping():
        return {"message": f"Pong! Current date: {current_date()}", "env": APP_ENV}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
