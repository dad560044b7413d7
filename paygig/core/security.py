"""Verification of identity-provider access tokens."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from paygig.core.config import get_settings
from paygig.schemas import Identity

security = HTTPBearer()


def decode_identity_token(token: str) -> Identity:
    """Decode a bearer token issued by the identity provider.

    Passwords, sessions and resets live with the provider; we only check the
    signature and read the subject.
    """
    settings = get_settings()
    audience = settings.security.audience
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return Identity(subject=str(subject), email=payload.get("email"))


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Identity:
    return decode_identity_token(credentials.credentials)
