from __future__ import annotations


class ReimaginerError(Exception):
    """Base error; the message is meant to be shown to the user as-is."""


class IngestionError(ReimaginerError):
    """An uploaded file could not be read as a supported image."""


class GenerationError(ReimaginerError):
    """The generation call failed or returned no usable image."""
