"""Exceptions raised by the location reference core."""


class LocationReferenceError(Exception):
    """Base class for location reference errors."""


class MalformedInputError(LocationReferenceError, ValueError):
    """Raised when caller input cannot be parsed.

    Covers bounding box strings, non-numeric distances, unknown unit names
    and unparseable well-known text handed directly to the geometry factory.
    """


class BackendConfigurationError(LocationReferenceError):
    """Raised when the configured geocoding backend cannot be loaded."""
