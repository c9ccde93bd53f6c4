"""SF2 parser exception types."""


class SF2FormatError(Exception):
    """Raised for RIFF/SF2 structure, chunk or truncation errors."""

    pass
