"""
Exception types raised by the discovery engine.
"""

from .constants import ERROR_MESSAGES


class DiscoveryError(Exception):
    """Base class for discovery failures."""


class ConfigurationError(DiscoveryError, ValueError):
    """Raised when discovery configuration is invalid."""


class CredentialsError(DiscoveryError):
    """Raised when cloud credentials cannot be resolved."""


class DiscoveryAbortedError(DiscoveryError):
    """
    A collector failed fatally and the whole run was aborted.

    The original exception is kept unmodified on ``error`` and chained as
    ``__cause__`` by the engine.
    """

    def __init__(self, family: str, error: BaseException):
        self.family = family
        self.error = error
        super().__init__(
            ERROR_MESSAGES["family_aborted"].format(family=family, error=error)
        )
