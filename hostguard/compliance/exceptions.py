"""
Custom exceptions for hostguard.
"""


class HostguardError(Exception):
    """Base exception for hostguard errors."""

    pass


class GatewayError(HostguardError):
    """Raised when a call to the virtualization manager fails."""

    def __init__(self, operation: str, host: str, reason: str):
        self.operation = operation
        self.host = host
        self.reason = reason
        super().__init__(f"{operation} failed on {host}: {reason}")


class HostNotFoundError(HostguardError):
    """Raised when a requested host is not in the inventory."""

    pass


class ConfigError(HostguardError):
    """Raised when connection settings are missing or invalid."""

    pass
