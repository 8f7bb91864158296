"""Exceptions raised by the renderer."""


class PpmtraceError(Exception):
    """Base exception for all renderer errors."""

    pass


class DegenerateVectorError(PpmtraceError, ValueError):
    """Raised when a zero-length vector is normalized."""

    pass


class PixelIndexError(PpmtraceError, IndexError):
    """Raised when a pixel index lies outside the image buffer."""

    pass
