from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from storefront.api.deps import CurrentUser, get_current_user, get_db
from storefront.services.user_service import UserService
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    user, created = UserService(db).create_user(payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    return user

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)

@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).update_user(current_user.id, current_user.role, user_id, payload)

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    UserService(db).delete_user(current_user.id, current_user.role, user_id)
