"""Configuration exceptions."""

from ssrexternal.domain.exceptions.base import SsrExternalError


class ConfigurationError(SsrExternalError):
    """Error in build configuration mapping.

    Raised when a configuration field has the wrong shape.
    FAIL-FIRST: validates inputs immediately.

    Attributes:
        field: Dotted name of the invalid field (must not be empty)
        reason: Why the field is invalid (must not be empty)
    """

    def __init__(self, field: str, reason: str) -> None:
        # FAIL-FIRST validation
        if not field:
            raise ValueError("field must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration '{field}': {reason}")
