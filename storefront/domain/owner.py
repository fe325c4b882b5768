# storefront/domain/owner.py
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: int


@dataclass(frozen=True)
class AnonymousSession:
    token: str


# who a cart belongs to; purchases are only ever owned by AuthenticatedUser
CartOwner = Union[AuthenticatedUser, AnonymousSession]
