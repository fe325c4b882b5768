# storefront/domain/errors.py
from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base class for errors raised by the services.

    `message` is safe to show to the caller, `internal_message` is for the logs only.
    The API layer maps `status_code` / `code` to the HTTP response.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, internal_message: Optional[str] = None):
        self.message = message
        self.internal_message = internal_message or message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class InvalidArgumentError(StorefrontError):
    status_code = 400
    code = "INVALID_ARGUMENT"


class UnauthenticatedError(StorefrontError):
    status_code = 401
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(StorefrontError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message)


class NotFoundError(StorefrontError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class EmptyCartError(StorefrontError):
    status_code = 400
    code = "EMPTY_CART"

    def __init__(self, message: str = "Cart is empty or not found"):
        super().__init__(message)


class ConflictError(StorefrontError):
    status_code = 409
    code = "CONFLICT"


class CartConflictError(ConflictError):
    code = "CART_CONFLICT"

    def __init__(self, message: str = "Cart was modified concurrently, try again"):
        super().__init__(message)


class CheckoutConflictError(ConflictError):
    code = "CHECKOUT_CONFLICT"

    def __init__(self, message: str = "Cart was modified by a concurrent checkout, try again"):
        super().__init__(message)


class StorageUnavailableError(StorefrontError):
    status_code = 500
    code = "STORAGE_UNAVAILABLE"

    def __init__(self, internal_message: str = "Storage unavailable"):
        # never leak driver details to the caller
        super().__init__(
            "An internal error occurred. Please try again later.",
            internal_message=internal_message,
        )
