from typing import Optional

from fastapi import Depends, Request

from tracker.business.services.auth_util import decode_token
from tracker.config import Config, logger
from tracker.data.schemas import ApiModel
from tracker.errors import AuthenticationException

auth_logger = logger.getChild("auth")


class CurrentUser(ApiModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class TokenFromRequest:
    """Reads the session token from the session cookie or a Bearer header."""

    def __init__(self, cookie_name: str = Config.SESSION_COOKIE_NAME, required: bool = True):
        self.cookie_name = cookie_name
        self.required = required

    async def __call__(self, request: Request) -> Optional[dict]:
        token = request.cookies.get(self.cookie_name)
        if not token:
            authorization = request.headers.get("authorization", "")
            scheme, _, credentials = authorization.partition(" ")
            if scheme.lower() == "bearer" and credentials:
                token = credentials.strip()

        if not token:
            if self.required:
                raise AuthenticationException(detail="Unauthorized")
            return None

        token_data = decode_token(token)
        if not token_data or not token_data.get("sub"):
            auth_logger.warning("Rejected invalid or expired session token")
            if self.required:
                raise AuthenticationException(detail="Invalid or expired session")
            return None

        return token_data


def _user_from_token(token_data: dict) -> CurrentUser:
    claims = token_data.get("user") or {}
    return CurrentUser(
        id=str(token_data["sub"]),
        name=claims.get("name"),
        email=claims.get("email"),
    )


def get_current_user(token_data: dict = Depends(TokenFromRequest())) -> CurrentUser:
    return _user_from_token(token_data)


def get_optional_user(
    token_data: Optional[dict] = Depends(TokenFromRequest(required=False)),
) -> Optional[CurrentUser]:
    if token_data is None:
        return None
    return _user_from_token(token_data)
