"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from biblioteca_auth.api.v1 import router as v1_router
from biblioteca_auth.core.config import settings
from biblioteca_auth.core.logging import configure_logging
from biblioteca_auth.services.errors import (
    ACCOUNT_INACTIVE,
    AuthError,
    AuthServiceError,
    ValidationError,
)

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Biblioteca Auth API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


def _error_response(exc: AuthServiceError, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    """Duplicate username/email at registration -> 409."""
    return _error_response(exc, status.HTTP_409_CONFLICT)


@app.exception_handler(AuthError)
async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    """Inactive account -> 403; bad credentials or refresh token -> 401."""
    if exc.code == ACCOUNT_INACTIVE:
        return _error_response(exc, status.HTTP_403_FORBIDDEN)
    return _error_response(exc, status.HTTP_401_UNAUTHORIZED)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Biblioteca Auth API"}
