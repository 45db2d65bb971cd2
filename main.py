# Essential imports
import time
from fastapi import FastAPI, Request, status, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from routers import auth, users

# Import all models so Base.metadata knows every table
import models
from core.database import Base, engine
from core.exceptions import AuthError

# Logging imports
from core.logging_config import setup_logging
from utils.logger import get_logger, log_request, sanitize_log_data
from middleware import RequestIDMiddleware, get_request_id
from core.config import settings

# CORS imports
from fastapi.middleware.cors import CORSMiddleware

# Initialize logging
setup_logging(
    log_level=settings.LOG_LEVEL,
    log_dir=settings.LOG_DIR
)

logger = get_logger(__name__)

# Lifecycle events logging
@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Application startup complete", extra={"event": "startup"})
    yield
    logger.info("Application shutting down", extra={"event": "shutdown"})


app = FastAPI(
    title="Session Lifecycle API",
    description="Registration, login and rotating refresh-token sessions",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# HTTP Request Logging Middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code and duration.
    """
    start_time = time.time()

    response = await call_next(request)

    log_request(
        logger,
        request.method,
        request.url.path,
        response.status_code,
        (time.time() - start_time) * 1000,
        client_ip=request.client.host if request.client else None,
        extra={
            "query_params": dict(request.query_params),
            "user_agent": request.headers.get("user-agent")
        }
    )

    return response


# Added last so it wraps the logging middleware and the ID is set first
app.add_middleware(RequestIDMiddleware)


# Health check
@app.get("/health")
async def health_check():
    logger.debug("Health check requested")
    return {"status": "Healthy"}


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    """
    Translate service failures (conflict, unauthorized, not found) into
    their HTTP status with a {"detail": ...} body.
    """
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    logger.warning(
        f"{type(exc).__name__}: {exc.detail}",
        extra=sanitize_log_data({
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "query_params": dict(request.query_params)
        })
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Log unhandled exceptions with full context and return a generic 500
    without exposing internals.
    """
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise exc

    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra=sanitize_log_data({
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "request_id": get_request_id(request),
            "query_params": dict(request.query_params)
        }),
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# Including routers
app.include_router(auth.router)
app.include_router(users.router)
