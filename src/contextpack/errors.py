"""Exception types raised inside the context pipeline."""


class ContextPackError(Exception):
    """Base class for all ContextPack errors."""


class ExtractionError(ContextPackError):
    """Source bytes could not be turned into text.

    Raised per file; a batch upload records it and moves on.
    """


class RepositoryError(ContextPackError):
    """The document repository failed to read or write."""


class FetchTimeoutError(ContextPackError):
    """The document repository did not answer within the fetch deadline."""


class FormattingError(ContextPackError):
    """A document record has a shape the formatter cannot render."""


class ValidationError(ContextPackError):
    """A token budget parameter is not a positive number."""
