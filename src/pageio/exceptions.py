# src/pageio/exceptions.py
from __future__ import annotations


class PageioError(Exception):
    """Base exception for pageio."""


class InvalidArgumentError(PageioError, ValueError):
    """Raised when a required argument such as the filename is empty."""


class UnresolvableFormatError(PageioError, ValueError):
    """Raised when neither the filename nor a format hint names a format."""


class UnsupportedFormatError(PageioError, ValueError):
    """Raised when the resolved format is not one of the supported formats."""

    def __init__(self, format_name: str):
        self.format_name = format_name
        super().__init__(f"{format_name} is not a supported format")


class ConfigLoadError(PageioError):
    """Raised when codec options cannot be loaded."""
