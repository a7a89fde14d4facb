"""JWT access token creation and verification.

Tokens are issued by the identity provider in front of this service; the
service only needs the shared HS256 secret to verify them. `sub` is the
participant id used as the caller of every command.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.mr_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

# Journal `caller` column width.
MAX_PARTICIPANT_ID_LENGTH = 128


def create_access_token(participant_id: str) -> str:
    """Issue a short-lived access token (default: 30 min). Used by tooling and tests."""
    now = datetime.now(UTC)
    payload = {
        "sub": participant_id,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_access_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: Token invalid, expired, not an access token, or
            its subject is longer than MAX_PARTICIPANT_ID_LENGTH.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    subject = payload.get("sub")
    if payload.get("type") != "access" or not subject:
        raise InvalidCredentialsError()
    if not isinstance(subject, str) or len(subject) > MAX_PARTICIPANT_ID_LENGTH:
        raise InvalidCredentialsError()
    return payload
