"""Custom exceptions for world generation."""


class ArchipelagoError(Exception):
    """Base exception for archipelago errors."""

    pass


class PresetNotFoundError(ArchipelagoError, FileNotFoundError):
    """Raised when a named config preset cannot be found."""

    pass


class InvalidMapError(ArchipelagoError, ValueError):
    """Raised when a saved map file is missing required data."""

    pass
