"""Per-document compilation context.

An :class:`Environment` is created for every document of a build and driven by
the parser in document order: titles open numbering levels, link definitions
fill the link table, and references either resolve immediately against the
shared :class:`~refsmith.core.metas.Metas` store or are recorded as pending
dependencies to reconcile once every document has published its metadata.

Usage Example
:
    >>> from refsmith.core.environment import Environment
    >>> from refsmith.core.metas import Metas
    >>> env = Environment("guide/install", Metas())
    >>> env.create_title(1), env.create_title(2)
    ('title.1', 'title.1.1')
    >>> env.push_anonymous("download")
    >>> env.set_link("_", " https://example.com/get ")
    >>> env.get_link("Download", relative=False)
    'https://example.com/get'
"""

from __future__ import annotations

from collections import deque
import logging
import posixpath
from typing import Any

from .config import EnvironmentConfig
from .dependencies import Dependency, DependencySet, PendingDependency, ResolvedDependency
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import CanonicalUrlError
from .metas import MetaEntry, Metas, Title
from .numbering import TitleNumbering
from .references import InvalidLink, Reference, ReferenceRegistry, ResolvedReference
from .slugs import slugify as _slugify
from .urls import UrlGenerator


logger = logging.getLogger(__name__)


ANONYMOUS = "_"


def normalise_link_name(name: str) -> str:
    """Return the lookup key of a link name (trimmed, lowercased)."""
    return name.strip().lower()


class Environment:
    """Compilation state of a single document."""

    def __init__(
        self,
        current_file_name: str,
        metas: Metas,
        *,
        current_directory: str = ".",
        target_directory: str = ".",
        registry: ReferenceRegistry | None = None,
        config: EnvironmentConfig | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._current_file_name = current_file_name
        self._current_directory = current_directory
        self._target_directory = target_directory
        self._metas = metas
        self._registry = registry if registry is not None else ReferenceRegistry()
        self._config = config or EnvironmentConfig()
        self._emitter = emitter or NullEmitter()
        self._url_generator = UrlGenerator(self._config)
        self._url: str | None = None

        self._numbering = TitleNumbering()
        self._links: dict[str, str] = {}
        self._anonymous: deque[str] = deque()
        self._dependencies = DependencySet()
        self._pending: dict[str, PendingDependency] = {}
        self._invalid_links: list[InvalidLink] = []
        self._variables: dict[str, Any] = {}

    def reset(self) -> None:
        """Reinitialise numbering state, keeping links, dependencies and variables."""
        self._numbering.reset()

    # Collaborators

    def get_config(self) -> EnvironmentConfig:
        return self._config

    def get_emitter(self) -> DiagnosticEmitter:
        return self._emitter

    def get_registry(self) -> ReferenceRegistry:
        return self._registry

    def get_metas(self) -> Metas:
        return self._metas

    def get_meta_entry(self) -> MetaEntry | None:
        return self._metas.get(self._current_file_name)

    # References

    def register_resolver(self, section: str, resolver: Reference) -> None:
        self._registry.register(section, resolver)

    def resolve(self, section: str, target: str) -> ResolvedReference | None:
        """Resolve ``target`` with the resolver registered for ``section``.

        Raises :class:`~refsmith.core.exceptions.UnknownReferenceSectionError`
        when no resolver handles ``section``. A target the resolver cannot find
        is recorded as an invalid link and its dependency edge is dropped; a
        target found after being declared pending has its edge promoted to the
        resolved file in the metadata store.
        """
        resolver = self._registry.require(section)
        resolved = resolver.resolve(self, target)
        key = self._dependency_key(target)

        if resolved is None:
            self._reject(section, target, key)
            return None

        if key is not None and resolved.file is not None:
            # A later pass may reconcile a document parsed by another environment.
            pending = self._pending.get(key) or PendingDependency(key)
            self._promote(pending, resolved.file)
        return resolved

    def _reject(self, section: str, target: str, key: str | None) -> None:
        self.add_invalid_link(InvalidLink(target, section=section, file=self._current_file_name))
        if key is not None:
            self._dependencies.discard_path(key)
            self._pending.pop(key, None)
            entry = self.get_meta_entry()
            if entry is not None:
                entry.remove_dependency(key)

        if not self._config.ignore_invalid_references:
            self._emitter.warning(
                f"Found invalid reference '{target}' in file '{self._current_file_name}'"
            )
        self._emitter.event(
            "invalid_link",
            {"target": target, "section": section, "file": self._current_file_name},
        )

    def _promote(self, pending: PendingDependency, path: str) -> None:
        promoted = self._dependencies.promote(pending, path)
        entry = self.get_meta_entry()
        if entry is not None and pending in entry.get_depends():
            entry.resolve_dependency(pending, path)
            promoted = True
        if not promoted:
            return
        self._emitter.event(
            "dependency_resolved",
            {"target": pending.path, "path": path, "file": self._current_file_name},
        )

    def _dependency_key(self, target: str) -> str | None:
        path = target.partition("#")[0]
        return self.canonical_url(path) if path.strip() else None

    def found(self, section: str, target: str) -> None:
        """Notify the resolver of ``section`` that ``target`` was seen.

        Unknown sections are reported to the diagnostics sink only.
        """
        resolver = self._registry.get(section)
        if resolver is None:
            self._emitter.error(f"Unknown reference section '{section}'")
            return
        resolver.found(self, target)

    def add_invalid_link(self, invalid_link: InvalidLink) -> None:
        self._invalid_links.append(invalid_link)

    def get_invalid_links(self) -> list[InvalidLink]:
        return list(self._invalid_links)

    # Variables

    def set_variable(self, name: str, value: Any) -> None:
        self._variables[name] = value

    def get_variable(self, name: str, default: Any = None) -> Any:
        return self._variables.get(name, default)

    # Numbering

    def create_title(self, level: int) -> str:
        return self._numbering.create_title(level)

    def get_number(self, level: int) -> int:
        return self._numbering.get_number(level)

    def get_level(self, letter: str) -> int:
        return self._numbering.get_level(letter)

    def get_title_letters(self) -> dict[int, str]:
        return dict(self._numbering.letters)

    @staticmethod
    def slugify(text: str) -> str:
        return _slugify(text)

    # Links

    def set_link(self, name: str, url: str) -> None:
        """Define a named link; the anonymous name binds to the oldest queued reference."""
        name = normalise_link_name(name)
        url = url.strip()

        if name == ANONYMOUS:
            if self._anonymous:
                name = self._anonymous.popleft()
            else:
                self._emitter.warning(
                    f"Anonymous link '{url}' in file '{self._current_file_name}' "
                    "has no matching anonymous reference"
                )

        self._links[name] = url

    def reset_anonymous_stack(self) -> None:
        self._anonymous.clear()

    def push_anonymous(self, name: str) -> None:
        self._anonymous.append(normalise_link_name(name))

    def get_links(self) -> dict[str, str]:
        return dict(self._links)

    def get_link(self, name: str, relative: bool = True) -> str | None:
        """Return the URL bound to ``name``, or None when the link is undefined."""
        name = normalise_link_name(name)
        if name not in self._links:
            return None

        link = self._links[name]
        if relative:
            return self.relative_url(link)
        return link

    # Dependencies

    def add_dependency(self, dependency: str, requires_resolving: bool = False) -> None:
        """Record that the current document depends on ``dependency``.

        Pending dependencies name a target whose document is not known yet;
        they are promoted once a reference to them resolves.
        """
        canonical = self.canonical_url(dependency)
        if canonical is None:
            raise CanonicalUrlError(dependency)

        entry: Dependency
        if requires_resolving:
            entry = self._pending.setdefault(canonical, PendingDependency(canonical))
        else:
            entry = ResolvedDependency(canonical)

        if self._dependencies.add(entry):
            logger.debug("%s depends on %s", self._current_file_name, entry)

    def get_dependencies(self) -> list[Dependency]:
        return list(self._dependencies)

    # URLs

    def relative_url(self, url: str | None) -> str | None:
        return self._url_generator.relative_url(url, self._current_file_name)

    def absolute_url(self, url: str) -> str:
        return self._url_generator.absolute_url(self.get_dir_name(), url)

    def canonical_url(self, url: str) -> str | None:
        return self._url_generator.canonical_url(self.get_dir_name(), url)

    def generate_url(self, path: str) -> str:
        return self._url_generator.generate_url(
            path, self._current_file_name, self.get_dir_name()
        )

    def get_dir_name(self) -> str:
        dirname = posixpath.dirname(self._current_file_name)
        return "" if dirname == "." else dirname

    def get_current_file_name(self) -> str:
        return self._current_file_name

    def get_current_directory(self) -> str:
        return self._current_directory

    def get_target_directory(self) -> str:
        return self._target_directory

    def absolute_relative_path(self, url: str) -> str:
        """Return the source-tree path of ``url`` as seen from the current document."""
        return posixpath.join(
            self._current_directory, self.get_dir_name(), self.relative_url(url) or ""
        )

    def get_url(self) -> str:
        if self._url is not None:
            return self._url
        return self._current_file_name

    def set_url(self, url: str) -> None:
        dir_name = self.get_dir_name()
        if dir_name:
            url = f"{dir_name}/{url}"
        self._url = url

    # Publication

    def publish(
        self,
        *,
        title: str = "",
        titles: list[Title] | None = None,
        tocs: list[list[str]] | None = None,
        mtime: float = 0.0,
    ) -> MetaEntry:
        """Merge this document's state into the shared metadata store."""
        return self._metas.set(
            self._current_file_name,
            self._config.output_url(self.get_url()),
            title=title,
            titles=titles or [],
            tocs=tocs or [],
            depends=self.get_dependencies(),
            links=self.get_links(),
            mtime=mtime,
        )


__all__ = ["ANONYMOUS", "Environment", "normalise_link_name"]
