"""Custom exceptions for zwcodec."""


class ZwCodecError(Exception):
    """Base exception for zwcodec operations."""


class ParseError(ZwCodecError):
    """Input text does not start with a valid root line."""


class ConversionError(ZwCodecError):
    """Tree cannot be represented in the requested output format."""
