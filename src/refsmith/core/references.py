"""Reference resolvers and the registry dispatching to them by section name.

A *section* is the kind of reference written in the markup (``doc`` for a
document path, ``ref`` for a named anchor). Every section maps to exactly one
resolver; registering a section again replaces the previous resolver.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import UnknownReferenceSectionError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .environment import Environment
    from .metas import MetaEntry, Title


@dataclass(frozen=True, slots=True)
class ResolvedReference:
    """Successfully resolved reference target."""

    file: str | None
    title: str | None
    url: str | None
    titles: tuple[Title, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class InvalidLink:
    """Reference whose target could not be resolved."""

    name: str
    section: str | None = None
    file: str | None = None


@runtime_checkable
class Reference(Protocol):
    """Capability every resolver provides to the environment."""

    def resolve(self, environment: Environment, data: str) -> ResolvedReference | None: ...

    def found(self, environment: Environment, data: str) -> None: ...


class ReferenceRegistry:
    """Mapping from section name to the resolver handling it."""

    def __init__(self, resolvers: Mapping[str, Reference] | None = None) -> None:
        self._resolvers: dict[str, Reference] = dict(resolvers or {})

    def register(self, section: str, resolver: Reference) -> None:
        """Install ``resolver`` for ``section``, replacing any previous one."""
        self._resolvers[section] = resolver

    def get(self, section: str) -> Reference | None:
        return self._resolvers.get(section)

    def require(self, section: str) -> Reference:
        try:
            return self._resolvers[section]
        except KeyError as exc:
            raise UnknownReferenceSectionError(section) from exc

    def sections(self) -> list[str]:
        return sorted(self._resolvers)

    def __contains__(self, section: object) -> bool:
        return section in self._resolvers

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections())

    def __len__(self) -> int:
        return len(self._resolvers)


def _resolved_from_entry(
    environment: Environment, entry: MetaEntry, anchor: str | None = None
) -> ResolvedReference:
    url = entry.url
    if url:
        url = environment.relative_url("/" + url) or ""
        if anchor is not None:
            url = f"{url}#{anchor}"
    return ResolvedReference(
        file=entry.file,
        title=entry.title,
        url=url,
        titles=tuple(entry.titles),
    )


def _strip_anchor(data: str) -> tuple[str, str | None]:
    path, _, anchor = data.partition("#")
    return path, anchor or None


class DocReference:
    """Resolve document paths, e.g. ``:doc:`../guide/install```."""

    def resolve(self, environment: Environment, data: str) -> ResolvedReference | None:
        path, anchor = _strip_anchor(data.strip())
        file = environment.canonical_url(path) if path else None
        if file is not None:
            entry = environment.get_metas().get(file)
            if entry is not None:
                return _resolved_from_entry(environment, entry, anchor)

        name = anchor or path
        entry = environment.get_metas().find_link_meta_entry(name) if name else None
        if entry is not None:
            return _resolved_from_entry(environment, entry, name.strip().lower())
        return None

    def found(self, environment: Environment, data: str) -> None:
        path, _ = _strip_anchor(data.strip())
        if path:
            environment.add_dependency(path)


class RefReference:
    """Resolve anchors published by any document, e.g. ``:ref:`install-linux```."""

    def resolve(self, environment: Environment, data: str) -> ResolvedReference | None:
        anchor = data.strip().lower()
        entry = environment.get_metas().find_link_meta_entry(anchor)
        if entry is None:
            return None
        return _resolved_from_entry(environment, entry, anchor)

    def found(self, environment: Environment, data: str) -> None:
        environment.add_dependency(data, requires_resolving=True)


def default_registry() -> ReferenceRegistry:
    """Return a registry preloaded with the ``doc`` and ``ref`` resolvers."""
    return ReferenceRegistry({"doc": DocReference(), "ref": RefReference()})


__all__ = [
    "DocReference",
    "InvalidLink",
    "RefReference",
    "Reference",
    "ReferenceRegistry",
    "ResolvedReference",
    "default_registry",
]
