"""Error types raised by GPX to KML conversion."""

from __future__ import annotations


class ConversionError(Exception):
    """Base error for conversion failures.

    Attributes
    ----------
    exit_code : int
        Process exit code used by the CLI when the error is fatal.
    """

    exit_code: int = 1


class InvalidArgumentError(ConversionError):
    """Run setup is invalid (bad directories, bad options)."""

    exit_code = 2


class MalformedInputError(ConversionError):
    """GPX document is missing an element or holds unparseable text."""


class OutputAlreadyExistsError(ConversionError):
    """Target KML file exists and will not be overwritten."""


class WriteFailureError(ConversionError):
    """KML document could not be serialized to disk."""
