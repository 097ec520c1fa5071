"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, status

from voice_relay.auth.dependencies import get_current_user
from voice_relay.dependencies import AccountServiceDep
from voice_relay.models.user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)

router = APIRouter()


def _public(user) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, accounts: AccountServiceDep):
    """
    Register a new user. The email must not already be registered.
    """
    user = await accounts.register(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return RegisterResponse(user=_public(user))


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, accounts: AccountServiceDep):
    """
    Authenticate user and return JWT token.
    """
    user, token = await accounts.login(request.email, request.password)
    return LoginResponse(token=token, user=_public(user))


@router.post("/change-password", response_model=MessageResponse)
async def change_password(request: ChangePasswordRequest, accounts: AccountServiceDep):
    """
    Change a user's password after checking the current one.
    """
    await accounts.change_password(
        email=request.email,
        old_password=request.old_password,
        new_password=request.new_password,
    )
    return MessageResponse(message="Password updated")


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """
    Logout user.
    Note: With JWT, logout is handled client-side by discarding the token.
    This endpoint is provided for API completeness.
    """
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """
    Get current authenticated user info.
    """
    return current_user
