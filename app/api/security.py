from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.infrastructure.auth.attempts import FailedAttemptTracker
from app.infrastructure.auth.tokens import InvalidTokenError, Principal, decode_principal
from app.wiring.dependencies import get_attempt_tracker


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(Exception):
    """Raised by the auth dependencies; rendered as a flat {error, reason} body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        reason: str,
        headers: dict[str, str] | None = None,
        **fields: Any,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.reason = reason
        self.headers = headers
        self.fields = fields


def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    content = {"error": exc.message, "reason": exc.reason, **exc.fields}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def _client_key(request: Request) -> str:
    # X-Forwarded-For is client-controlled; only a trusted proxy may set it.
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tracker: FailedAttemptTracker = Depends(get_attempt_tracker),
) -> Principal:
    client = _client_key(request)

    attempt = tracker.check(client)
    if attempt.locked:
        minutes = max(1, (attempt.retry_after_seconds + 59) // 60)
        raise AuthError(
            status.HTTP_429_TOO_MANY_REQUESTS,
            f"Too many failed authentication attempts. Try again in {minutes} minutes.",
            reason="locked_out",
            headers={"Retry-After": str(attempt.retry_after_seconds)},
            retryAfter=attempt.retry_after_seconds,
        )

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError(
            status.HTTP_401_UNAUTHORIZED,
            "Authentication token missing",
            reason="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # tolerate stray quotes pasted around the token
    token = credentials.credentials.strip().strip('"').strip("'")
    try:
        principal = decode_principal(token)
    except InvalidTokenError as e:
        failed = tracker.record_failure(client)
        logger.warning("Rejected bearer token", extra={"client": client, "reason": str(e)})
        raise AuthError(
            status.HTTP_401_UNAUTHORIZED,
            "Invalid or expired token",
            reason="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
            remaining=failed.remaining,
        ) from e

    tracker.record_success(client)
    return principal


def require_roles(*roles: str) -> Callable[..., Principal]:
    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if roles and principal.role not in roles:
            raise AuthError(
                status.HTTP_403_FORBIDDEN,
                "You do not have permission to access this resource",
                reason="forbidden",
            )
        return principal

    return dependency
