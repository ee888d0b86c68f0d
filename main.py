"""
Main FastAPI application entry point.
"""
import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette import status
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from config import Settings, load_settings
from errors import ServiceError, StorageError
from Quote_module.Quote_store import QuoteStore, create_quote_store
from Notification_module.Notification_dispatcher import NotificationDispatcher

# Routers
from Login_module.Admin.Admin_router import router as admin_router
from Notification_module.Notification_router import router as notification_router
from Quote_module.Quote_router import router as quote_router, admin_router as quote_admin_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses with status codes."""

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        start_time = time.time()

        logger.info(f"→ {request.method} {request.url.path} | IP: {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} | "
                f"Status: 500 (SERVER_ERROR) | "
                f"Error: {str(e)} | "
                f"Duration: {duration:.3f}s | "
                f"IP: {client_ip}"
            )
            raise

        duration = time.time() - start_time
        status_code = response.status_code
        if 200 <= status_code < 300:
            status_category = "SUCCESS"
        elif 300 <= status_code < 400:
            status_category = "REDIRECT"
        elif 400 <= status_code < 500:
            status_category = "CLIENT_ERROR"
        else:
            status_category = "SERVER_ERROR"

        logger.info(
            f"{request.method} {request.url.path} | "
            f"Status: {status_code} ({status_category}) | "
            f"Duration: {duration:.3f}s | "
            f"IP: {client_ip}"
        )
        return response


class BodySizeLimitMiddleware:
    """
    Rejects requests whose body is larger than max_bytes with 413.

    The declared Content-Length is checked first; bodies without one (chunked)
    are read up to the limit and replayed to the app, so handlers only ever
    see bodies that fit.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        content_length = headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            await self._reject(scope, receive, send, content_length)
            return

        messages = []
        received = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_bytes:
                await self._reject(scope, receive, send, f"more than {self.max_bytes}")
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: str) -> None:
        logger.warning(f"Rejected {scope['method']} {scope['path']}: body of {size} bytes")
        response = JSONResponse(
            status_code=413,
            content={"status": "error", "message": "Request body too large"},
        )
        await response(scope, receive, send)


def _format_validation_errors(exc):
    """Return consistent error structure for 422 responses."""
    detail_list = []
    errors = exc.errors() if hasattr(exc, "errors") else []

    for err in errors:
        loc = err.get("loc", [])
        source = loc[0] if loc else "body"
        field = loc[-1] if len(loc) > 1 else loc[0] if loc else None
        detail_list.append({
            "source": source,
            "field": field,
            "message": err.get("msg"),
            "type": err.get("type")
        })
    return detail_list


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    detail_list = _format_validation_errors(exc)
    return JSONResponse(
        status_code=422,
        content={
            "status": "error",
            "message": "Request validation failed.",
            "details": detail_list
        }
    )


async def service_exception_handler(request: Request, exc: ServiceError):
    """Translate service errors to JSON. Storage details stay in the server log."""
    if isinstance(exc, StorageError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.message},
    )


def _warn_on_missing_admin_config(settings: Settings) -> None:
    if not settings.ADMIN_PASSWORD or not settings.ADMIN_TOKEN_SECRET:
        logger.warning("ADMIN_PASSWORD or ADMIN_TOKEN_SECRET is missing; admin login is disabled.")
    if not settings.email_configured:
        logger.info("Email alerts disabled (SMTP settings or ADMIN_EMAIL missing)")
    if not settings.sms_configured:
        logger.info("SMS alerts disabled (SENS settings or ADMIN_PHONE missing)")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[QuoteStore] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """
    Build the application. Settings, store and dispatcher are created here once
    and shared by every request through app.state.
    """
    if settings is None:
        # Started as `uvicorn main:create_app --factory`
        settings = load_settings()
        configure_logging(settings.LOG_LEVEL)
    store = store or create_quote_store(settings)
    dispatcher = dispatcher or NotificationDispatcher(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown."""
        logger.info("Starting application...")
        _warn_on_missing_admin_config(settings)
        # Refuse to start without a usable quotes table
        store.initialize()
        logger.info(f"Application started successfully (storage: {store.engine_name})")
        yield
        logger.info("Shutting down application...")
        store.dispose()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="LED Rental Quote API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store
    app.state.dispatcher = dispatcher

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ServiceError, service_exception_handler)

    # Middleware (last added runs first)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(RequestLoggingMiddleware)
    allowed_origins = settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_credentials=bool(allowed_origins),
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    # Include routers
    app.include_router(quote_router)
    app.include_router(admin_router)
    app.include_router(quote_admin_router)
    app.include_router(notification_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint for container orchestration."""
        return {"ok": True}

    @app.get("/", include_in_schema=False)
    def root():
        """Send browsers to the admin page."""
        return RedirectResponse(settings.ADMIN_PAGE_URL, status_code=status.HTTP_302_FOUND)

    return app


# Run application
if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"Server will be available at: http://{settings.HOST}:{settings.PORT}")

    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )
