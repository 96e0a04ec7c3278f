class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a login attempt is refused."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DuplicateUsernameError(ValidationError):
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class UserNotFoundError(ValidationError):
    def __init__(self, username: str):
        super().__init__("User not found")
        self.username = username


class InvalidBackupError(ValidationError):
    """Raised when an imported backup lacks its version or settings."""

    def __init__(self, message: str = "Invalid backup"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Same message for unknown username and wrong password."""

    def __init__(self):
        super().__init__("Invalid username or password")


class AccountDisabledError(AuthenticationError):
    def __init__(self):
        super().__init__("Account is disabled")


class AccountLockedError(AuthenticationError):
    def __init__(self, remaining_minutes: int):
        super().__init__(f"Account locked. Try again in {remaining_minutes} minute(s).")
        self.remaining_minutes = remaining_minutes
