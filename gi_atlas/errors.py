"""Exception hierarchy. Per-row issues are never raised, only logged."""

from __future__ import annotations


class GIAtlasError(Exception):
    """Base class for all gi_atlas errors."""


class SourceReadError(GIAtlasError):
    """The registry source file could not be read. Fatal for a batch run."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read source file {path}: {reason}")


class DatasetLoadError(GIAtlasError):
    """The normalized dataset could not be read or did not validate."""
