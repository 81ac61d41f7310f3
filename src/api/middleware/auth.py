"""Bearer token authentication for private routes.

``require_identity`` is attached to every private router in api.main. It
trusts the token signature and never loads the user; handlers that need the
full record fetch it through the UserRepository themselves.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_service
from domain.model.errors import TokenError
from domain.model.identity import AuthenticatedIdentity
from port.token_service import TokenService

logger = logging.getLogger(__name__)

# auto_error=False so a missing header goes through the same 401 path below
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedIdentity:
    """Resolve the caller from the Authorization header (required).

    Every failure (no header, wrong scheme, malformed/forged/expired token)
    produces the same 401; the reason is only logged.
    """
    if not credentials or not credentials.credentials:
        logger.debug("Missing bearer token", extra={"path": request.url.path})
        raise _unauthenticated()

    try:
        user_id = tokens.validate(credentials.credentials)
    except TokenError as e:
        logger.info("Bearer token rejected", extra={
            "path": request.url.path,
            "reason": type(e).__name__,
        })
        raise _unauthenticated()

    identity = AuthenticatedIdentity(user_id=user_id)
    request.state.identity = identity
    return identity
