"""Domain errors raised by the storefront service layer."""


class StorefrontError(Exception):
    """Base class for every storefront error."""


class UserNotFoundError(StorefrontError):
    """Raised when no user matches the given user name."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' not found.")


class OrderNotFoundError(StorefrontError):
    """Raised when no order matches the given identifier."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order '{order_id}' not found.")


class DuplicateUserError(StorefrontError):
    """Raised when a user name or email is already taken."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"A user with {field} '{value}' already exists.")


class InvalidOrderError(StorefrontError):
    """Raised when order data or a status transition is rejected."""


class UnsupportedDriverError(StorefrontError):
    """Raised when a driver or dialect has no known counterpart."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported database driver or dialect '{name}'.")
