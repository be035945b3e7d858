from __future__ import annotations


class SecurityError(Exception):
    """Base class for errors raised by the security controller."""


class InvalidOperationError(SecurityError):
    """
    Operation is not valid for the current sensor set.

    Raised when adding a sensor whose (name, type) identity already exists,
    removing one that does not exist, or changing the activation of an unknown
    sensor.
    """
