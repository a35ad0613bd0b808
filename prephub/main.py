# prephub/main.py
import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from prephub.config import Settings, settings as default_settings
from prephub.database import Store, get_db, utcnow
from prephub.errors import AppError, Internal, ValidationError
from prephub.init_db import ensure_admin
from prephub.logging_config import setup_logging
from prephub.routers import auth, brands, courses, favorites, messages, users
from prephub.services.stats import dashboard_counts
from prephub.utils.auth import Identity, require_admin

logger = logging.getLogger("prephub")

API_NAME = "PREP HUB API"
API_VERSION = "1.0.0"


def _error_body(exc: AppError) -> dict:
    return {"error": exc.message, "code": exc.code}


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s -> %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = f"{where}: {first.get('msg')}" if where else "Invalid request"
        err = ValidationError(msg)
        return JSONResponse(status_code=err.status_code, content=_error_body(err))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": detail, "code": "http_error"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled application error", exc_info=exc)
        return JSONResponse(status_code=500, content=_error_body(Internal()))


def create_app(cfg: Settings | None = None, store: Store | None = None) -> FastAPI:
    cfg = cfg or default_settings
    store = store or Store(cfg.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if cfg.uses_default_secret:
            logger.warning("JWT_SECRET is not set; using the built-in fallback secret. Set JWT_SECRET in production.")
        store.open()
        ensure_admin(store, cfg)
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title=API_NAME, version=API_VERSION, lifespan=lifespan)
    app.state.settings = cfg
    app.state.store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
            ms = int((time.time() - start) * 1000)
            logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
            return response
        except Exception:
            ms = int((time.time() - start) * 1000)
            logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
            raise

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials="*" not in cfg.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_error_handlers(app)

    # Routers
    app.include_router(auth.router)
    app.include_router(courses.router)
    app.include_router(favorites.router)
    app.include_router(users.router)
    app.include_router(brands.router)
    app.include_router(messages.contact_router)
    app.include_router(messages.router)

    @app.get("/api")
    def api_info():
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "status": "running",
            "endpoints": {
                "auth": "/api/auth",
                "courses": "/api/courses",
                "favorites": "/api/favorites",
                "users": "/api/users",
                "brands": "/api/brands",
                "contact": "/api/contact",
                "messages": "/api/messages",
            },
        }

    @app.get("/api/health")
    def health():
        return {"status": "ok", "timestamp": utcnow().isoformat()}

    @app.get("/api/stats")
    def stats(db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
        return dashboard_counts(db)

    return app


setup_logging(default_settings.LOG_DIR, default_settings.LOG_LEVEL)
app = create_app()
