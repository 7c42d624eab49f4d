"""
Identity resolution middleware.

Runs before routing on every request and attaches whatever identity the
request carries:

- request.state.firebase_identity: from a verified Authorization: Bearer token
- request.state.session_identity: from a valid session cookie

A bearer token that fails verification rejects the request outright
(the cookie is not consulted as a fallback). A bad or missing cookie is
never an error by itself; the guards decide what anonymous callers get.
"""

import logging
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from modules.auth.exceptions import InvalidTokenError, TokenRevokedError
from shared.exceptions import AuthenticationError, ExternalServiceError
from shared.models import Identity, IdentitySource

from ..dependencies import get_container
from ..errors import error_response

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"

# Health checks never resolve an identity
UNAUTHENTICATED_PATHS = frozenset({"/api/health", "/api/ready"})


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Token from an Authorization header, or None if the scheme is not Bearer.

    Returns an empty string for a Bearer header without a token.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    return token.strip()


class IdentityResolutionMiddleware(BaseHTTPMiddleware):
    """Resolve bearer and session identities for each request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.firebase_identity = None
        request.state.session_identity = None
        if request.url.path in UNAUTHENTICATED_PATHS:
            return await call_next(request)
        container = get_container()

        token = extract_bearer_token(request.headers.get("authorization"))
        if token is not None:
            try:
                if not token:
                    raise InvalidTokenError()
                verified = await container.identity_provider.verify_token(token)
            except TokenRevokedError as e:
                logger.info(f"Revoked bearer token on {request.url.path}")
                return error_response(e)
            except AuthenticationError:
                return error_response(InvalidTokenError())
            except ExternalServiceError as e:
                return error_response(e)
            request.state.firebase_identity = Identity(
                subject_id=verified.subject_id,
                claims=verified.claims,
                source=IdentitySource.BEARER,
            )

        sessions = container.sessions
        cookie = request.cookies.get(sessions.cookie_name)
        if cookie:
            try:
                subject_id = sessions.verify(cookie)
            except AuthenticationError as e:
                logger.debug(f"Ignoring session cookie: {e.code}")
            else:
                request.state.session_identity = Identity(
                    subject_id=subject_id,
                    claims={"uid": subject_id},
                    source=IdentitySource.SESSION,
                )

        return await call_next(request)


def get_request_identity(request: Request) -> Optional[Identity]:
    """
    Combined identity for a request.

    The bearer identity wins when both channels resolved (its claims are
    richer); the source then reports both.
    """
    bearer: Optional[Identity] = getattr(request.state, "firebase_identity", None)
    session: Optional[Identity] = getattr(request.state, "session_identity", None)
    if bearer and session:
        return bearer.model_copy(update={"source": IdentitySource.BOTH})
    return bearer or session
