"""Exception hierarchy for the cross-reference compilation core."""

from __future__ import annotations


class RefsmithError(RuntimeError):
    """Base exception for compilation failures."""


class UnknownReferenceSectionError(RefsmithError, LookupError):
    """Raised when a reference names a section no resolver was registered for."""

    def __init__(self, section: str) -> None:
        super().__init__(f"Unknown reference section '{section}'")
        self.section = section


class CanonicalUrlError(RefsmithError, ValueError):
    """Raised when a declared dependency has no canonical form."""

    def __init__(self, dependency: str) -> None:
        super().__init__(f"Could not get canonical url for dependency '{dependency}'")
        self.dependency = dependency


class DependencyResolutionError(RefsmithError):
    """Raised when a pending dependency cannot be found in a metadata entry."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "CanonicalUrlError",
    "DependencyResolutionError",
    "RefsmithError",
    "UnknownReferenceSectionError",
    "exception_hint",
    "exception_messages",
]
