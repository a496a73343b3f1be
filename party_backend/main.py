"""FastAPI application entry point."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import logging
import sys

from party_backend.config import Settings, get_settings
from party_backend.database import build_engine, build_session_factory, create_tables
from party_backend.routers import demo, health, party, songs, themes
from party_backend.schemas.base import serialize_datetime_utc
from party_backend.services.container import PartyServices
from party_backend.utils.datetime_helpers import utc_now
from party_backend.utils.exceptions import PartyEngineException

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Ensure console streams can emit Unicode (theme icons) on Windows
for stream in (sys.stdout, sys.stderr):
    if hasattr(stream, "reconfigure"):
        stream.reconfigure(encoding="utf-8", errors="backslashreplace")


class SQLTransactionFilter(logging.Filter):
    def filter(self, record):
        if record.levelno == logging.INFO and hasattr(record, 'getMessage'):
            message = record.getMessage()

            if any(keyword in message for keyword in ['ROLLBACK', 'BEGIN', 'COMMIT', 'generated in']):
                return False

            # Collapse multi-line statements onto one line
            if any(kw in message for kw in ['SELECT', 'DELETE', 'INSERT', 'UPDATE']):
                record.msg = ' '.join(message.split())
                record.args = ()

        return True


def configure_logging(settings: Settings) -> None:
    """Console plus rotating file logging; SQL statements go to their own file."""
    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_file = logs_dir / "party_engine.log"
    sql_log_file = logs_dir / "party_engine_sql.log"

    # 1 MB per file, keep 5 backups
    rotating_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8')
    rotating_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    sql_rotating_handler = RotatingFileHandler(sql_log_file, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8')
    sql_rotating_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Force=True overrides any existing configuration (e.g., from uvicorn)
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(), rotating_handler],
        force=True,
    )

    uvicorn_access_logger = logging.getLogger("uvicorn.access")
    if rotating_handler not in uvicorn_access_logger.handlers:
        uvicorn_access_logger.addHandler(rotating_handler)

    sqlalchemy_logger = logging.getLogger("sqlalchemy.engine.Engine")
    sqlalchemy_logger.handlers.clear()
    sqlalchemy_logger.addHandler(sql_rotating_handler)
    sqlalchemy_logger.addFilter(SQLTransactionFilter())
    sqlalchemy_logger.setLevel(logging.INFO)
    sqlalchemy_logger.propagate = False  # Keep SQL out of the general log

    logging.getLogger(__name__).info(f"General logging to: {log_file.absolute()}")


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Build the engine, tables and services container for the app's lifetime."""
    settings: Settings = app_instance.state.settings

    logger.info("=" * 60)
    logger.info("Party Engine API Starting")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'SQLite'}")
    logger.info("=" * 60)

    engine = build_engine(settings)
    await create_tables(engine)

    app_instance.state.engine = engine
    app_instance.state.services = PartyServices.from_session_factory(build_session_factory(engine), settings)

    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Party Engine API Shutting Down... Goodbye!")


async def party_engine_exception_handler(request: Request, exc: PartyEngineException):
    """Render engine errors as ``{"error": {...}, "timestamp": ...}``."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")

    error = {"code": exc.code, "message": exc.message}
    if exc.field:
        error["field"] = exc.field

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": error,
            "timestamp": serialize_datetime_utc(utc_now()),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with user-friendly messages."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = " -> ".join(str(x) for x in loc[1:]) if len(loc) > 1 else "unknown field"
        errors.append({
            "field": field_path,
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "unknown"),
        })

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "errors": errors,
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or get_settings()

    app_instance = FastAPI(
        title="Party Engine API",
        description="Party progression, scoring and demo mode",
        version="0.1.0",
        lifespan=lifespan,
    )
    app_instance.state.settings = settings

    app_instance.add_exception_handler(PartyEngineException, party_engine_exception_handler)
    app_instance.add_exception_handler(RequestValidationError, validation_exception_handler)

    app_instance.include_router(health.router, tags=["health"])
    app_instance.include_router(party.router, prefix="/parties", tags=["parties"])
    app_instance.include_router(songs.router, tags=["songs"])
    app_instance.include_router(themes.router, tags=["themes"])
    app_instance.include_router(demo.router, prefix="/demo", tags=["demo"])

    return app_instance


configure_logging(get_settings())
app = create_app()


