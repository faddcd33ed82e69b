"""Auth routes - user record registration after identity-provider sign-in."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventory_hub.auth import TokenClaims, get_token_claims
from inventory_hub.database import get_db
from inventory_hub.schemas.user import UserRecordResponse
from inventory_hub.services.users import ensure_user_record

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/create-user-record", response_model=UserRecordResponse)
async def create_user_record(
    claims: TokenClaims = Depends(get_token_claims),
    db: Session = Depends(get_db)
):
    """Register the signed-in user. The very first user becomes admin."""
    if not claims.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing user data"
        )

    user, created = ensure_user_record(db, claims.uid, claims.email)
    if user.is_blocked:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is blocked"
        )

    if not created:
        message = "User record already exists"
    elif user.is_admin:
        message = "First user - admin rights granted"
    else:
        message = "User record created"

    return UserRecordResponse(is_admin=user.is_admin, message=message)
