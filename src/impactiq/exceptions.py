"""Custom exceptions for ImpactIQ.

Exception hierarchy:
- ImpactIQError (base)
  - ConfigurationError: Invalid policy configuration
  - ValidationError: Data validation failed
    - RatingOutOfRangeError: Sub-rating outside 0-3 under the "reject" policy
  - ScaleMismatchError: Rating classified against the wrong scale
  - ExtractionError: Failed to normalize a batch of raw rows
"""


class ImpactIQError(Exception):
    """Base exception for all ImpactIQ errors."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        """Initialize with technical message and optional user-friendly message.

        Args:
            message: Technical error message for logging/debugging.
            user_message: Human-readable message for UI display.
                         If None, uses the technical message.
        """
        super().__init__(message)
        self.user_message = user_message or message


class ConfigurationError(ImpactIQError):
    """Raised when configuration is invalid.

    Example: Priority thresholds that are not strictly descending.
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.config_key = config_key


class ValidationError(ImpactIQError):
    """Raised when data validation fails.

    Example: Row without a process_id, every row of a batch unusable.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.field = field
        self.value = value


class RatingOutOfRangeError(ValidationError):
    """Raised when a sub-rating falls outside 0-3 and the reject policy is active."""


class ScaleMismatchError(ImpactIQError):
    """Raised when a rating is classified against the wrong scale.

    Example: Asking for a 0-3 "standard" label for an overall rating of 5.
    This is a programmer error and is never swallowed.
    """

    def __init__(
        self,
        message: str,
        scale: str | None = None,
        rating: object = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.scale = scale
        self.rating = rating


class ExtractionError(ImpactIQError):
    """Raised when raw rows cannot be turned into impact records.

    Example: A DataFrame handed over by the import layer has no rows.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.source = source
