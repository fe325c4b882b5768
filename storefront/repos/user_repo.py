# storefront/repos/user_repo.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def insert_user(self, user: UserModel) -> tuple[UserModel, bool]:
        """Insert, or return the row a concurrent request inserted first."""
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return self.db.get(UserModel, user.id), False
        self.db.refresh(user)
        return user, True

    def update_user(self, user: UserModel, changes: dict) -> UserModel:
        for field, value in changes.items():
            setattr(user, field, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: UserModel) -> None:
        # the user's cart goes with it (CASCADE on carts.user_id)
        self.db.delete(user)
        self.db.commit()
