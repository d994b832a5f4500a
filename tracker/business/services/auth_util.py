from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import uuid

import jwt

from tracker.config import Config


def create_access_token(
    user_id: str,
    user_data: Optional[dict] = None,
    expiry: timedelta = timedelta(seconds=Config.JWT_ACCESS_TOKEN_EXPIRY),
) -> str:
    """Mint a session token in the format the sign-in provider issues."""
    payload = {
        "sub": user_id,
        "user": user_data or {},
        "exp": datetime.now(timezone.utc) + expiry,
        "jti": str(uuid.uuid4()),
    }
    return encode_token(payload)


def encode_token(payload: dict) -> str:
    return jwt.encode(payload=payload, key=Config.JWT_SECRET, algorithm=Config.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[Any]:
    try:
        return jwt.decode(
            jwt=token, key=Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM]
        )
    except jwt.PyJWTError:
        return None
