# storefront/api/deps.py
import uuid
from dataclasses import dataclass
from typing import Iterator, Optional

from fastapi import Depends, Header, Request, Response
from sqlalchemy.orm import Session

from storefront.data.database import Database
from storefront.domain.errors import ForbiddenError, InvalidArgumentError, UnauthenticatedError
from storefront.domain.owner import AnonymousSession, AuthenticatedUser, CartOwner
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService
from storefront.utils.settings import CART_COOKIE_MAX_AGE, CART_COOKIE_NAME
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    role: str


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_lock_service(request: Request) -> Optional[LockService]:
    return request.app.state.lock_service


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """One session per request, closed when the request is done."""
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def _parse_user_id(raw: str) -> int:
    try:
        user_id = int(raw)
    except ValueError:
        raise InvalidArgumentError("Invalid X-User-Id header format. Must be a positive integer.") from None
    if user_id <= 0:
        raise InvalidArgumentError("User ID must be a positive integer")
    return user_id


def _resolve_user(raw: str, db: Session) -> CurrentUser:
    user_id = _parse_user_id(raw)
    user = UserRepo(db).get_user(user_id)
    if user is None:
        logger.warning(f"Unknown user id {user_id} in X-User-Id")
        raise UnauthenticatedError("Invalid credentials: user not found")
    return CurrentUser(id=user.id, role=user.role)


def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """
    Resolves the caller from the X-User-Id header.

    Raises:
        UnauthenticatedError: header missing or user unknown
        InvalidArgumentError: header is not a positive integer
    """
    if not x_user_id:
        raise UnauthenticatedError("User ID missing from headers. Please provide X-User-Id header.")
    return _resolve_user(x_user_id, db)


def get_cart_owner(
    request: Request,
    response: Response,
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: Session = Depends(get_db),
) -> CartOwner:
    """
    Authenticated user when X-User-Id is sent, otherwise the anonymous session
    from the cart cookie. A new session token is issued (and set as a cookie)
    when the caller has none.
    """
    if x_user_id:
        return AuthenticatedUser(user_id=_resolve_user(x_user_id, db).id)

    token = request.cookies.get(CART_COOKIE_NAME)
    if not token:
        token = uuid.uuid4().hex
        response.set_cookie(
            key=CART_COOKIE_NAME,
            value=token,
            max_age=CART_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    return AnonymousSession(token=token)


def require_roles(*roles: str):
    def dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise ForbiddenError(f"Access denied. Required role(s): {', '.join(roles)}")
        return current_user

    return dependency
