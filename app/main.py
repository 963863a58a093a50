# app/main.py

"""Blog Backend - REST API for posts, authors and media uploads."""

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded

from app.errors import (
    DatabaseError,
    MediaSigningError,
    PostError,
    UserAuthenticationError,
    auth_exception_handler,
    database_exception_handler,
    media_exception_handler,
    post_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import posts_router
from app.utils.helpers import today_str

app = FastAPI(
    title="Blog Backend",
    description="Blog Backend API",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

routes = [
    posts_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (PostError, post_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (MediaSigningError, media_exception_handler),
    (DatabaseError, database_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 00:00:00",
                        "services": {"media_signer": "configured"},
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check() -> ORJSONResponse:
    """
    Health check endpoint.

    Returns
    -------
    ORJSONResponse
        Version, status and the state of process-wide services.
    """
    signer = getattr(app.state, "media_signer", None)
    media_status = "configured" if signer and signer.is_configured else "not_configured"

    return ORJSONResponse(
        {
            "version": app.version,
            "status": "ok",
            "timestamp": today_str(),
            "services": {"media_signer": media_status},
        },
    )
