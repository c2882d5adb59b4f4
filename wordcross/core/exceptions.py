"""Custom exception hierarchy for wordcross."""


class WordcrossError(Exception):
    """Base exception for the package."""


class ListValidationError(WordcrossError):
    """Raised when a word list or generation options break the input rules."""


class ImportFormatError(WordcrossError):
    """Raised when an imported list file cannot be parsed."""


class StoreError(WordcrossError):
    """Raised when a stored puzzle document cannot be found or read."""


class ValidationError(WordcrossError):
    """Raised when a finished grid breaks a placement invariant."""
