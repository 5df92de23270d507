"""Base exceptions for ssrexternal domain."""


class SsrExternalError(Exception):
    """Root exception for all ssrexternal errors.

    All domain exceptions inherit from this.
    Allows catching all ssrexternal-specific errors.
    """
