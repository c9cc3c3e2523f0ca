"""API key authentication middleware."""

import secrets

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

PUBLIC_PATHS = frozenset(
    {"/", "/health", "/api/v1/", "/api/v1/health", "/docs", "/openapi.json", "/redoc"}
)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Reject requests without a matching X-API-Key header when a key is configured."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in PUBLIC_PATHS or not settings.api_key:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        if not api_key:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "detail": (
                        "Missing X-API-Key header. Please provide API key for authentication."
                    )
                },
            )

        if not secrets.compare_digest(api_key, settings.api_key):
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid API key. Please check your X-API-Key header."},
            )

        return await call_next(request)
