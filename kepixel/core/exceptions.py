"""Shared exceptions module.

Configuration errors are programmer mistakes and are raised immediately,
before any network activity. Transport errors are raised by transport
adapters and always caught by the dispatcher.
"""

from typing import Optional


class KepixelException(Exception):
    """Base exception for the Kepixel client."""

    pass


class ConfigurationError(KepixelException):
    """Exception raised when the tracker is misconfigured."""

    def __init__(self, message: Optional[str] = "Invalid Kepixel configuration"):
        """Create a new ConfigurationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class MissingParameterError(ConfigurationError):
    """Exception raised when a tracking call lacks a required parameter."""

    def __init__(self, parameter: str, operation: str):
        """Create a new MissingParameterError instance.

        Args:
        ----
            parameter (str): Name of the missing parameter.
            operation (str): Human readable name of the tracking operation.

        """
        self.parameter = parameter
        self.operation = operation
        super().__init__(
            f'Error: The "{parameter}" parameter is required for tracking {operation}.'
        )


class TransportError(KepixelException):
    """Exception raised when a request could not be delivered to the collector."""

    def __init__(self, message: Optional[str] = "Transport failure", url: Optional[str] = None):
        """Create a new TransportError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.
            url (str, optional): The URL the request was sent to.

        """
        self.message = message
        self.url = url
        super().__init__(self.message)
