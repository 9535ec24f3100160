"""Core compilation state: environments, metadata store, resolvers and URLs."""

from __future__ import annotations

from .config import EnvironmentConfig
from .dependencies import Dependency, DependencySet, PendingDependency, ResolvedDependency
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter, RecordingEmitter
from .environment import ANONYMOUS, Environment, normalise_link_name
from .exceptions import (
    CanonicalUrlError,
    DependencyResolutionError,
    RefsmithError,
    UnknownReferenceSectionError,
)
from .metas import MetaEntry, Metas
from .numbering import TITLE_DEPTHS, TITLE_MARKER, TitleNumbering
from .references import (
    DocReference,
    InvalidLink,
    RefReference,
    Reference,
    ReferenceRegistry,
    ResolvedReference,
    default_registry,
)
from .reporting import collect_invalid_links, format_invalid_links_report
from .slugs import slugify
from .urls import UrlGenerator, absolute_url, canonical_url, canonicalize, relative_url


__all__ = [
    "ANONYMOUS",
    "TITLE_DEPTHS",
    "TITLE_MARKER",
    "CanonicalUrlError",
    "Dependency",
    "DependencyResolutionError",
    "DependencySet",
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
    "TitleNumbering",
    "UnknownReferenceSectionError",
    "UrlGenerator",
    "absolute_url",
    "canonical_url",
    "canonicalize",
    "collect_invalid_links",
    "default_registry",
    "format_invalid_links_report",
    "normalise_link_name",
    "relative_url",
    "slugify",
]
