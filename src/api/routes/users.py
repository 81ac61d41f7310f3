"""Private user routes. Mounted behind require_identity in api.main."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.middleware.auth import require_identity
from api.models import UserResponse
from domain.model.identity import AuthenticatedIdentity
from port.user_repository import UserRepository

router = APIRouter(tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_me(
    identity: AuthenticatedIdentity = Depends(require_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Return the authenticated user's record.

    The token may outlive the account, so a missing user is a 404 here.
    """
    user = repo.get_by_id(identity.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return UserResponse(
        id=user.id,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
