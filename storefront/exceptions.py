class StorefrontError(Exception):
    """Base exception for Storefront errors.

    Subclasses only set ``default_message``; it is used whenever an error
    is raised without a message of its own.
    """

    default_message = "An error occurred in the Storefront client"

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message shown to the user
            code: Optional error code
            details: Additional error details, e.g. stock figures
        """
        self.message = message or self.default_message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {'error': self.__class__.__name__, 'message': self.message}

        if self.code:
            error_dict['code'] = self.code
        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ConfigError(StorefrontError):
    """Settings file is missing a value or holds an unusable one."""
    default_message = "Configuration error"


class DatabaseError(StorefrontError):
    """A statement or commit failed in the database."""
    default_message = "Database error"


class DatabaseConnectionError(DatabaseError):
    """The database can't be reached at startup. Fatal for the client."""
    default_message = "Unable to connect to database"


class AuthError(StorefrontError):
    """Login credentials don't match exactly one user."""
    default_message = "Invalid name or password"


class AuthorizationError(StorefrontError):
    """The user may not perform the operation or touch the store."""
    default_message = "You are not authorized to perform this operation"


class ValidationError(StorefrontError):
    """Malformed or out-of-range input; the caller should reprompt."""
    default_message = "Invalid input"


class InsufficientStockError(ValidationError):
    """An order asks for more units than the store has."""
    default_message = "Not enough units in stock"


class NotFoundError(StorefrontError, LookupError):
    """Unknown user location, store, product or warehouse."""
    default_message = "Resource not found"


class OrderError(StorefrontError):
    """The order could not be recorded."""
    default_message = "Order error"
