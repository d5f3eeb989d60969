"""
Error taxonomy for claimcheck

Every failure a request can hit maps onto one of these. The HTTP layer turns
them into status codes; nothing here is retried.
"""


class ClaimCheckError(Exception):
    """Base exception for claimcheck errors."""
    pass


class ValidationError(ClaimCheckError):
    """Malformed or missing client input."""
    pass


class ConfigurationError(ClaimCheckError):
    """External generation requested without a credential configured."""
    pass


class GenerationError(ClaimCheckError):
    """External quiz generation failed."""
    pass


class GenerationRequestError(GenerationError):
    """The model provider call failed (network, quota, timeout)."""
    pass


class GenerationParseError(GenerationError):
    """The model replied, but not with a usable quiz payload."""
    pass


class NotFoundError(ClaimCheckError):
    """Unknown or expired quiz id."""
    pass
