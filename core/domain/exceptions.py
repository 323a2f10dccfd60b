"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ApplicationException(DomainException):
    """Base exception for application-related errors."""

    pass


class ApplicationNotFoundError(ApplicationException):
    """Raised when an application is not found."""

    def __init__(self, message: str = "Application does not exist."):
        super().__init__(message, code="APPLICATION_NOT_FOUND")


class KeyException(DomainException):
    """Base exception for key-related errors."""

    pass


class KeyNotFoundError(KeyException):
    """Raised when a key is not found."""

    def __init__(self, message: str = "Key does not exist."):
        super().__init__(message, code="KEY_NOT_FOUND")


class DuplicateKeyError(KeyException):
    """Raised by repositories when a key token violates the unique constraint."""

    def __init__(self, message: str = "Key token already exists"):
        super().__init__(message, code="DUPLICATE_KEY")


class KeyConflictError(KeyException):
    """Raised when no unique key token could be generated."""

    def __init__(self, message: str = "Could not generate a unique key."):
        super().__init__(message, code="KEY_CONFLICT")


class InvalidKeyStatusError(KeyException):
    """Raised when a key status transition is not allowed."""

    def __init__(self, message: str = "Invalid key status transition"):
        super().__init__(message, code="INVALID_KEY_STATUS")


class AccessException(DomainException):
    """Base exception for access-control errors."""

    pass


class PermissionDeniedError(AccessException):
    """Raised when a requester is not entitled to use the service."""

    def __init__(self, message: str = "You do not have permission to use this bot."):
        super().__init__(message, code="PERMISSION_DENIED")


class StoreUnavailableError(DomainException):
    """Raised when the backing store cannot be reached or times out."""

    def __init__(self, message: str = "Database connection error."):
        super().__init__(message, code="STORE_UNAVAILABLE")
