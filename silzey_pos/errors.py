"""Error types and user-facing messages for the point-of-sale core."""

from typing import Optional


class errmsg:
    """User-facing message constants."""

    CART_EMPTY = "Your cart is empty. Please add items before checking out."
    CUSTOMER_FIELDS_REQUIRED = "Please fill in all customer information fields."
    UNKNOWN_CATEGORY = "Unknown category"
    CHECKOUT_NOT_OPEN = "Checkout is not open"
    CART_NOT_OPEN = "Cart is not open"
    LIFECYCLE_STARTED = "Lifecycle already started"
    LIFECYCLE_NOT_STARTED = "Lifecycle has not been started"
    LIFECYCLE_TORN_DOWN = "Lifecycle has been torn down"


class PosError(Exception):
    """Base class for point-of-sale errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class EmptyCartError(PosError):
    """Checkout was attempted with nothing in the cart."""

    def __init__(self):
        super().__init__(errmsg.CART_EMPTY)


class ValidationError(PosError):
    """A required customer field was left empty."""

    def __init__(self, missing_fields: tuple[str, ...]):
        super().__init__(errmsg.CUSTOMER_FIELDS_REQUIRED)
        self.missing_fields = missing_fields


class UnknownCategoryError(PosError):
    """Category is not part of the catalog."""

    def __init__(self, category: str):
        super().__init__(f"{errmsg.UNKNOWN_CATEGORY}: {category!r}")
        self.category = category


class InvalidStateError(PosError):
    """Operation is not meaningful in the current session state."""


class ConfigError(PosError):
    """Configuration value could not be used."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(f"invalid configuration: {message}", cause)
