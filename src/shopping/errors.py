"""Error taxonomy for the shopping domain.

Each error carries the HTTP status it maps to. Business-rule and lookup errors
are raised by the domain and returned to callers as-is; ``InternalError``
subclasses are logged in full and answered with a generic message.
"""


class ShoppingError(Exception):
    """Base class for all shopping domain errors."""

    status_code: int = 500
    default_message: str = "Shopping error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(ShoppingError):
    status_code = 401
    default_message = "X-User-Id header was not provided"


class BadRequestError(ShoppingError):
    status_code = 400
    default_message = "Invalid request"


class PaymentRequiredError(ShoppingError):
    status_code = 402
    default_message = "Insufficient balance"


class NotFoundError(ShoppingError):
    status_code = 404
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class ItemNotFoundError(NotFoundError):
    default_message = "Product not found in basket"


class OrderNotFoundError(NotFoundError):
    default_message = "Order not found"


class ConflictError(ShoppingError):
    status_code = 409
    default_message = "Conflict"


class DuplicateItemError(ConflictError):
    default_message = "Product already in basket. Use the update operation to change its count."


class BasketFullError(ConflictError):
    default_message = "Basket is full"


class AccountExistsError(ConflictError):
    default_message = "An account with this name already exists"


class InternalError(ShoppingError):
    status_code = 500
    default_message = "Internal server error"


class CorruptBasketError(InternalError):
    """A cached basket entry could not be read back into a line item."""

    default_message = "Basket entry could not be read"


class BasketStoreError(InternalError):
    """The basket cache store is unreachable or refused the operation."""

    default_message = "Basket store unavailable"
