# brandmate/main.py
import datetime as dt
import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brandmate.config import settings
from brandmate.core.db import init_db, close_db, ping_db
from brandmate.core.bootstrap import ensure_default_admin
from brandmate.core.errors import AppError
from brandmate.core.security import warn_if_default_secret
from brandmate.api.routers import auth, names

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info("[http] %s %s -> %s (%.1f ms)", request.method, request.url.path,
                response.status_code, (time.perf_counter() - started) * 1000)
    return response

# ===== Error mapping =====
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON or wrong field types: same 400 shape as our own validation
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Validation error", "message": "; ".join(parts) or "Invalid request"},
    )

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": "Route not found",
                     "message": f"Cannot {request.method} {request.url.path}"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": "HTTP error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[http] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Something went wrong!",
                 "message": str(exc) if settings.is_development else "Internal server error"},
    )

# ===== Lifecycle =====
@app.on_event("startup")
async def on_startup():
    warn_if_default_secret()
    # Local sqlite databases get their tables created; other engines go through Aerich migrations
    await init_db(generate_schemas=settings.database_url.startswith("sqlite"))
    await ensure_default_admin()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api")
app.include_router(names.router, prefix="/api")

@app.get("/")
def root():
    return {"message": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}

@app.get("/api/health")
async def health():
    now = dt.datetime.now(dt.timezone.utc).isoformat()
    try:
        db_name = await ping_db()
    except Exception as e:
        logger.error("[health] database check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "unhealthy", "database": {"status": "error"}, "timestamp": now},
        )
    return {"status": "healthy", "database": {"status": "connected", "name": db_name}, "timestamp": now}
