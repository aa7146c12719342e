"""Static bearer token authentication applied to every request."""
import logging
import secrets

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp


logger = logging.getLogger(__name__)

UNAUTHORIZED_BODY = {"error": "Unauthorized request"}


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the token from an `Authorization: Bearer <token>` header value.

    Returns None when the header is missing, uses another scheme, or carries
    no token.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def is_authorized(authorization: str | None, api_token: str) -> bool:
    """Check the header against the configured token using exact equality."""
    token = extract_bearer_token(authorization)
    if token is None:
        return False
    return secrets.compare_digest(token.encode(), api_token.encode())


class ApiTokenMiddleware(BaseHTTPMiddleware):
    """
    Reject every request that does not present the configured API token.

    There are no exempt routes: unknown paths and the health check are gated
    the same way as the bookmark endpoints.
    """

    def __init__(self, app: ASGIApp, api_token: str) -> None:
        super().__init__(app)
        self.api_token = api_token

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Short-circuit with 401 unless the bearer token matches."""
        if not is_authorized(request.headers.get("Authorization"), self.api_token):
            logger.error("Unauthorized request to path: %s", request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=UNAUTHORIZED_BODY,
            )
        return await call_next(request)
