"""Error types raised by the cloud adapter."""

from typing import Optional, Sequence


class CloudError(Exception):
    """Base error for all adapter failures."""
    pass


class ConfigurationError(CloudError):
    """Invalid or incomplete network/adapter configuration."""
    pass


class PlacementConflictError(CloudError):
    """Availability zone hints disagree."""

    def __init__(self, message: str, hints: Sequence = ()):
        super().__init__(message)
        self.hints = list(hints)


class ProviderError(CloudError):
    """Error reported by the compute provider."""
    pass


class TransientProviderError(ProviderError):
    """Provider error that may succeed when retried."""
    pass


class ResourceMissingError(ProviderError):
    """Provider reports that the resource does not exist (or not yet)."""
    pass


class UnhandledProviderError(ProviderError):
    """Provider error with no retry policy."""
    pass


class InstanceStateError(CloudError):
    """Instance reached a state it cannot leave while being waited on."""
    pass


class PollTimeoutError(CloudError, TimeoutError):
    """Polling budget exhausted."""

    def __init__(self, message: str, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class RegistryError(CloudError):
    """Settings registry request failed."""
    pass
