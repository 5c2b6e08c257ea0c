"""Exception hierarchy for ListingMVP.

Every error the API reports maps to exactly one of these classes; the app
factory registers one handler per class.
"""


class ListingError(Exception):
    """Base exception for all ListingMVP errors."""


class NotFoundError(ListingError):
    """Raised when a requested record does not exist."""


class ValidationError(ListingError):
    """Raised when a payload fails schema validation.

    ``issues`` is the validator's list of problems, already JSON-serializable.
    """

    def __init__(self, message="Invalid payload", issues=None):
        super().__init__(message)
        self.issues = list(issues or [])


class UsernameTakenError(ListingError):
    """Raised when registering a username that already exists."""


class AuthRequiredError(ListingError):
    """Raised when a route needs a logged-in session and none is present."""


class ConfigurationError(ListingError):
    """Raised when configuration is invalid or missing."""


class GenerationError(ListingError):
    """Raised when text generation fails or returns unusable content."""


class ProviderError(GenerationError):
    """Raised by a text generator when the provider call itself fails."""
