from __future__ import annotations

from typing import Optional


class ComicGenError(Exception):
    """Base class for pipeline failures."""


class FormatError(ComicGenError):
    """The script is not valid YAML or does not have the document shape.

    `path` points at the offending node (e.g. "/pages/2/panels") when known.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class LayoutError(ComicGenError):
    """A layout grid could not be parsed or drawn."""
