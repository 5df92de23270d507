"""Module resolution exceptions."""

from ssrexternal.domain.exceptions.base import SsrExternalError


class ResolutionError(SsrExternalError):
    """Specifier could not be located by a resolver.

    Non-fatal: the probe treats it as "bundle", the legacy walker
    logs it and skips the dependency.

    Attributes:
        specifier: Import specifier that failed to resolve
        reason: Why resolution failed
    """

    def __init__(self, specifier: str, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if not specifier:
            raise ValueError("specifier must not be empty")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.specifier = specifier
        self.reason = reason
        super().__init__(f"Failed to resolve '{specifier}': {reason}")
