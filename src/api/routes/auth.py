"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_password_hasher, get_token_service, get_user_repo
from api.models import CredentialsRequest, RegisterResponse, TokenResponse
from domain.model.errors import DuplicateIdentityError, InvalidCredentialsError
from port.password_hasher import PasswordHasher
from port.token_service import TokenService
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: CredentialsRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Register a new user.

    Raises:
        HTTPException: 409 Conflict if the email is already registered
    """
    try:
        user_id = auth_service.register(repo, hasher, request.email, request.password)
    except DuplicateIdentityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered"
        )
    return RegisterResponse(user_id=user_id)


@router.post("/login", response_model=TokenResponse)
def login(
    request: CredentialsRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email and password for a bearer token.

    Raises:
        HTTPException: 401 if credentials are invalid (same response whether
            or not the email exists)
    """
    try:
        token = auth_service.login(repo, hasher, tokens, request.email, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(token=token)
