"""FastAPI dependency: get_current_participant.

Usage in any protected router:
    from src.mr_gateway.auth.dependencies import get_current_participant

    @router.post("/claim")
    async def claim(participant: str = Depends(get_current_participant)):
        ...

Role checks (owner, schedule operator) are enforced by the domain, which
raises UnauthorizedError for any other caller.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.mr_common.errors import InvalidCredentialsError
from src.mr_gateway.auth.jwt_handler import decode_access_token

# tokenUrl is served by the external identity provider
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_participant(token: str = Depends(oauth2_scheme)) -> str:
    """Validate the Bearer token and return the participant id (`sub`)."""
    try:
        payload = decode_access_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    return payload["sub"]
