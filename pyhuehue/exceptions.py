"""Exceptions raised by pyhuehue."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ErrorCode


class PyHueException(Exception):
    """Base exception class for pyhuehue exceptions."""


class ColorException(PyHueException, ValueError):
    """Base class for errors raised by the color engine."""


class InvalidComponent(ColorException):
    """A chromaticity point, or the gamut it is checked against, is invalid."""


class DegenerateGamut(ColorException):
    """The gamut triangle has no area (collinear primaries)."""


class OutOfGamut(ColorException):
    """A color point lies outside the gamut it is expressed against."""


class InvalidRGB(ColorException):
    """An RGB channel is not an integer in the range [0, 255]."""


class InvalidDeviceType(PyHueException, ValueError):
    """The application or device name is not accepted by the bridge."""


class HTTPException(PyHueException):
    """HTTP request to the bridge failed."""


class HTTPNotOkException(HTTPException):
    """Raised when a non-2xx status is returned."""

    def __init__(self, message: str = "", status: int = 0) -> None:
        """Record the HTTP status along with the message."""
        self.status = status
        super().__init__(message)


class UnauthorizedException(HTTPNotOkException):
    """The bridge rejected the application key or the link button."""


class AlreadyAuthorized(PyHueException):
    """The client already holds an application key."""


class NotAuthorized(PyHueException):
    """An application key is required for this request."""


class UnsupportedException(PyHueException):
    """The light does not support the requested operation."""


class InvalidResponseError(PyHueException):
    """Raised when an unexpected JSON response is received."""


class APIError(PyHueException):
    """The bridge answered with an error object."""

    def __init__(
        self,
        description: str = "",
        error_type: ErrorCode | None = None,
        address: str = "",
    ) -> None:
        """Initialize from the fields of a bridge error object."""
        self.description = description
        self.error_type = error_type
        self.address = address
        details = f" ({address})" if address else ""
        prefix = f"{int(error_type)}: " if error_type is not None else ""
        super().__init__(f"{prefix}{description}{details}")
