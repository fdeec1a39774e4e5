from __future__ import annotations

from typing import Any, Dict, Mapping


class TangleError(Exception):
    """Base exception for mdtangle."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class FormatError(TangleError, ValueError):
    """Raised when a block annotation does not follow the annotation grammar."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TangleError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DuplicateFileError(TangleError, ReferenceError):
    """Raised when a code file with the same name is already registered."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TangleError.__init__(self, message, context=context)
        ReferenceError.__init__(self, message)


class DuplicateSectionError(TangleError, ReferenceError):
    """Raised when a code section with the same name already exists in a file."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TangleError.__init__(self, message, context=context)
        ReferenceError.__init__(self, message)


class MissingFileError(TangleError, LookupError):
    """Raised when a code file cannot be found in the store."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TangleError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class MissingSectionError(TangleError, LookupError):
    """Raised when a referenced section never received any block."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        section: str | None = None,
        referenced_from: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if filename:
            ctx["filename"] = filename
        if section:
            ctx["section"] = section
        if referenced_from:
            ctx["referenced_from"] = referenced_from
        TangleError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class CycleError(TangleError, RuntimeError):
    """Raised when a section reference chain revisits a section being rendered."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        chain: list[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if filename:
            ctx["filename"] = filename
        if chain:
            ctx["chain"] = list(chain)
        TangleError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class ConfigError(TangleError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TangleError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "TangleError",
    "FormatError",
    "DuplicateFileError",
    "DuplicateSectionError",
    "MissingFileError",
    "MissingSectionError",
    "CycleError",
    "ConfigError",
]
