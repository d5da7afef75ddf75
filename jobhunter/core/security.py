from datetime import datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt

from jobhunter.config import settings


def create_access_token(subject: str, email: str | None = None) -> str:
    """Mint a token shaped like the identity provider's (dev and tests only)."""
    expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {
        "sub": subject,
        "email": email,
        "aud": settings.jwt_audience,
        "role": "authenticated",
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.supabase_jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def generate_id() -> str:
    return str(uuid4())
