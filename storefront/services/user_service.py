from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel
from storefront.domain.errors import ConflictError, ForbiddenError, InvalidArgumentError, NotFoundError
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate
from storefront.repos.purchase_repo import PurchaseRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.purchases = PurchaseRepo(db)

    def create_user(self, payload: UserCreate) -> tuple[UserRead, bool]:
        existing = self.repo.get_user(payload.id)
        if existing:
            return UserRead.model_validate(existing), False

        user, created = self.repo.insert_user(
            UserModel(id=payload.id, name=payload.name, role=payload.role)
        )
        if created:
            logger.info(f"User {user.id} registered as {user.role}")
        return UserRead.model_validate(user), created

    def get_user(self, user_id: int) -> UserRead:
        return UserRead.model_validate(self._require_user(user_id))

    def update_user(self, actor_id: int, actor_role: str, user_id: int, payload: UserUpdate) -> UserRead:
        """
        A user edits their own profile, an admin edits anyone's.
        Only an admin may change a role.
        """
        self._check_access(actor_id, actor_role, user_id)
        user = self._require_user(user_id)

        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] is None:
            raise InvalidArgumentError("User name cannot be null")
        if "role" in changes:
            if changes["role"] is None:
                raise InvalidArgumentError("User role cannot be null")
            if actor_role != "admin":
                raise ForbiddenError("Only an admin can change a role")

        updated = self.repo.update_user(user, changes)
        logger.info(f"User {user_id} updated by {actor_id}: {sorted(changes)}")
        return UserRead.model_validate(updated)

    def delete_user(self, actor_id: int, actor_role: str, user_id: int) -> None:
        self._check_access(actor_id, actor_role, user_id)
        user = self._require_user(user_id)

        # purchase history is never deleted
        if self.purchases.has_purchases(user_id):
            raise ConflictError("User has purchases and cannot be deleted")

        self.repo.delete_user(user)
        logger.info(f"User {user_id} deleted by {actor_id}")

    def _require_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User")
        return user

    @staticmethod
    def _check_access(actor_id: int, actor_role: str, user_id: int) -> None:
        if actor_id != user_id and actor_role != "admin":
            raise ForbiddenError("You can only modify your own account")
