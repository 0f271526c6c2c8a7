"""
AgriScan Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the services once (or accepts ready-made ones),
       stores them on app.state, and registers middleware, exception
       handlers and routes.
Who:   uvicorn (`uvicorn agriscan.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ POST /gemini │ │ POST saveScan│ │ GET getFarms│  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  app.state:  settings, text_service,                │
    │              document_store, scan_service           │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError → 400 │ StorageError → 500       │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from agriscan import __version__
from agriscan.config import Settings, settings as default_settings
from agriscan.exceptions import AgriScanError, StorageError, ValidationError
from agriscan.middleware.logging import RequestLoggingMiddleware
from agriscan.middleware.request_id import RequestIDMiddleware, request_id_var
from agriscan.routes import gemini, health, scans
from agriscan.services.document_store import DocumentStore, InMemoryDocumentStore
from agriscan.services.gemini_service import GeminiService
from agriscan.services.llm_base import TextCompletionService
from agriscan.services.scan_service import ScanService

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout, where the container / function runtime collects it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Chatty per-call loggers from the server and Google client stack
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Service Construction
# ══════════════════════════════════════════════════════════════════════════

def build_text_service(config: Settings) -> TextCompletionService:
    return GeminiService(api_key=config.gemini_api_key, model_name=config.gemini_model)


def build_document_store(config: Settings) -> DocumentStore:
    """
    Instantiate the DocumentStore selected by DOCUMENT_STORE.

    Backend modules are imported here so a deployment only loads the client
    library it actually uses.
    """
    if config.document_store == "memory":
        return InMemoryDocumentStore()

    if config.document_store == "sql":
        from agriscan.database import build_engine
        from agriscan.services.sql_store import SqlDocumentStore

        engine = build_engine(
            config.database_url,
            pool_pre_ping=config.db_pool_pre_ping,
            echo=config.log_level == "DEBUG",
        )
        return SqlDocumentStore(engine)

    from agriscan.services.firestore_store import FirestoreDocumentStore

    return FirestoreDocumentStore(
        project_id=config.firebase_project_id,
        credentials_path=config.firebase_credentials_path,
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Report missing configuration (the service keeps running)
    Shutdown:
        1. Close the document store
    """
    config: Settings = app.state.settings

    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("AgriScan Backend %s starting up...", __version__)

    try:
        config.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Document store: %s", app.state.document_store.name)
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("AgriScan Backend shutting down...")
    await app.state.document_store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to `{"error": message}` JSON responses.

        ValidationError         → 400
        RequestValidationError  → 400 (malformed JSON, non-object body)
        StorageError            → 500 (context logged, never returned)
        AgriScanError           → 500
        Exception               → 500 with a generic message
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Unparseable request body: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(AgriScanError)
    async def handle_app_error(request: Request, exc: AgriScanError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    text_service: Optional[TextCompletionService] = None,
    document_store: Optional[DocumentStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:         Settings to use; the module-level settings if None.
        text_service:   AI client; a GeminiService built from config if None.
        document_store: Persistence backend; chosen by config if None.

    Returns:
        Fully configured FastAPI instance.
    """
    config = config or default_settings

    app = FastAPI(
        title="AgriScan API",
        description=(
            "Backend for the AgriScan web and mobile clients: multilingual "
            "AI answers for farmers and storage of crop scan reports."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # ── Services (one instance each per process) ──────────────────────────
    if text_service is None:
        text_service = build_text_service(config)
    if document_store is None:
        document_store = build_document_store(config)

    app.state.settings = config
    app.state.text_service = text_service
    app.state.document_store = document_store
    app.state.scan_service = ScanService(document_store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    origins = config.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(gemini.router)
    app.include_router(scans.router)
    app.include_router(health.router)

    return app


app = create_app()
