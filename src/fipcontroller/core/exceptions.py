class FipControllerError(Exception):
    """Base exception for the floating IP controller."""

    pass


class ConfigError(FipControllerError):
    """Raised when the process configuration is missing or invalid."""

    pass


class MalformedResourceError(FipControllerError):
    """Raised when a Kubernetes resource lacks a field the controller relies on."""

    pass


class ProviderIDError(MalformedResourceError):
    """Raised when a node's providerID is missing or cannot be parsed."""

    pass


class NoEligibleServerError(FipControllerError):
    """Raised when there is no schedulable server left to receive a floating IP."""

    pass


class WatchError(FipControllerError):
    """Raised when a Kubernetes watch stream reports an error event."""

    pass


class HcloudAPIError(FipControllerError):
    """Raised when the Hetzner Cloud API answers with an error response."""

    def __init__(self, status_code: int, code: str = None, message: str = None):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"Hetzner Cloud API error {status_code} ({code or 'unknown'}): {message or 'no message'}")
