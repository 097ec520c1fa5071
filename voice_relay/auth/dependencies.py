"""
Authentication dependencies for FastAPI.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from voice_relay.auth.utils import decode_access_token
from voice_relay.dependencies import SettingsDep, UserStoreDep
from voice_relay.exceptions import InvalidCredentialsError
from voice_relay.models.user import UserResponse

# HTTP Bearer token scheme; missing headers are reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    settings: SettingsDep,
    store: UserStoreDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserResponse:
    """
    Dependency to get the current authenticated user from JWT token.
    """
    if credentials is None:
        raise InvalidCredentialsError("Could not validate credentials")

    # Decode token
    token_data = decode_access_token(credentials.credentials, settings)
    if token_data is None:
        raise InvalidCredentialsError("Could not validate credentials")

    # Get user from database
    user = await store.get_user_by_id(token_data.user_id)
    if user is None:
        raise InvalidCredentialsError("Could not validate credentials")

    return UserResponse(id=user.id, name=user.name, email=user.email)
