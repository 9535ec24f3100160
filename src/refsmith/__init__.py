"""Primary public API for refsmith."""

from __future__ import annotations

from refsmith.core import (
    ANONYMOUS,
    TITLE_MARKER,
    CanonicalUrlError,
    Dependency,
    DiagnosticEmitter,
    DocReference,
    Environment,
    EnvironmentConfig,
    InvalidLink,
    LoggingEmitter,
    MetaEntry,
    Metas,
    NullEmitter,
    PendingDependency,
    RecordingEmitter,
    RefReference,
    Reference,
    ReferenceRegistry,
    RefsmithError,
    ResolvedDependency,
    ResolvedReference,
    UnknownReferenceSectionError,
    collect_invalid_links,
    default_registry,
    format_invalid_links_report,
    slugify,
)
from refsmith.version import get_version


__version__ = get_version()

__all__ = [
    "ANONYMOUS",
    "TITLE_MARKER",
    "CanonicalUrlError",
    "Dependency",
    "DiagnosticEmitter",
    "DocReference",
    "Environment",
    "EnvironmentConfig",
    "InvalidLink",
    "LoggingEmitter",
    "MetaEntry",
    "Metas",
    "NullEmitter",
    "PendingDependency",
    "RecordingEmitter",
    "RefReference",
    "Reference",
    "ReferenceRegistry",
    "RefsmithError",
    "ResolvedDependency",
    "ResolvedReference",
    "UnknownReferenceSectionError",
    "__version__",
    "collect_invalid_links",
    "default_registry",
    "format_invalid_links_report",
    "get_version",
    "slugify",
]
