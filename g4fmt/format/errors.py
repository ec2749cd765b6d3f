class FormatError(Exception):
    """Base class for formatting failures."""


class FormatWriteError(FormatError):
    """The output sink rejected a write; the run is aborted."""
