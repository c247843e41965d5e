"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class ProviderNotSetError(LicenseException):
    """Raised when license state is queried before a provider is bound."""

    def __init__(
        self,
        message: str = "Cannot query license state because license provider has not been set",
    ):
        super().__init__(message, code="PROVIDER_NOT_SET")


class LicenseActivationError(LicenseException):
    """Raised when the entitlement manager rejects an activation key."""

    def __init__(self, message: str = "License activation failed"):
        super().__init__(message, code="LICENSE_ACTIVATION_FAILED")


class LicenseManagerNotReadyError(LicenseException):
    """Raised when an operation needs a running entitlement manager and there is none."""

    def __init__(self, message: str = "License manager is not initialized"):
        super().__init__(message, code="LICENSE_MANAGER_NOT_READY")


class CommandChannelException(DomainException):
    """Base exception for inter-instance command channel errors."""

    pass


class CommandPublishError(CommandChannelException):
    """Raised when a command cannot be published to peer instances."""

    def __init__(self, message: str = "Failed to publish command"):
        super().__init__(message, code="COMMAND_PUBLISH_FAILED")
