from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import api_router
from .config import Settings, load_settings
from .database import Database
from .errors import StoreFailure, ValidationFailure
from .logging_config import configure_logging
from .services import CategoryService
from .store import RecordStore

logger = structlog.get_logger(__name__)


def init_database(database: Database) -> None:
    """Seed the default categories into a fresh database."""
    session = database.session()
    try:
        CategoryService(RecordStore(session)).seed_defaults()
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup if one wasn't supplied, close it on shutdown."""
    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.open(app.state.settings.database_path)
        init_database(app.state.database)
    yield
    # Cleanup on shutdown
    if owns_database:
        app.state.database.close()
        app.state.database = None


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the API application.

    With no database given, the one at settings.database_path is opened when
    the app starts.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Expense Tracker",
        description="Local personal expense tracking with monthly budgets",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    if database is not None:
        init_database(database)

    # CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],  # Vite dev server
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationFailure)
    async def validation_failure_handler(request: Request, exc: ValidationFailure):
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure):
        logger.error("request_store_failure", path=request.url.path, operation=exc.operation)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
