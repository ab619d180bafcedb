from __future__ import annotations


class PixelcutError(Exception):
    """Base class for every error raised by pixelcut."""


class InvalidInput(PixelcutError, ValueError):
    """Bad dimensions or a buffer whose size does not match width x height x 4."""


class MissingSnapshot(PixelcutError):
    """Restore was requested but no original snapshot was captured."""


class InvalidState(PixelcutError):
    """An editor operation was called in a state that does not allow it."""
