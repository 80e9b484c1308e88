"""/v1/users/me - profile of the signed-in user"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pocket_ledger.api.v1.schemas import UserProfileRequest, UserProfileResponse
from pocket_ledger.api.dependencies import get_current_user_id
from pocket_ledger.infrastructure.database.session import get_db
from pocket_ledger.infrastructure.database.repositories import UserRepository

router = APIRouter()


@router.put("/users/me", response_model=UserProfileResponse)
def save_profile(
    request_body: UserProfileRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = UserRepository(db).save_profile(user_id, request_body.username, request_body.email)
    db.commit()
    return UserProfileResponse.model_validate(user)


@router.get("/users/me", response_model=UserProfileResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = UserRepository(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="Profile not found")
    return UserProfileResponse.model_validate(user)
