"""Corpus-wide metadata store shared by every document of a build.

Each compiled document publishes one :class:`MetaEntry` keyed by its canonical
file name. Later documents read these entries to resolve references that point
forward, and rewrite the dependency edges recorded in them once a pending
reference finally resolves.

Entries are mutated from several environments over a build, possibly from
several threads, so the store and every entry serialise their writes with a
lock.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
import logging
from threading import Lock

from .dependencies import Dependency, DependencySet, PendingDependency, ResolvedDependency
from .exceptions import DependencyResolutionError


logger = logging.getLogger(__name__)


Title = tuple[str, int]


@dataclass(slots=True, eq=False)
class MetaEntry:
    """Published state of a single document."""

    file: str
    url: str
    title: str = ""
    titles: list[Title] = field(default_factory=list)
    tocs: list[list[str]] = field(default_factory=list)
    depends: DependencySet = field(default_factory=DependencySet)
    links: dict[str, str] = field(default_factory=dict)
    mtime: float = 0.0
    parent: str | None = None
    _resolved: set[PendingDependency] = field(default_factory=set, init=False, repr=False)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def get_depends(self) -> list[Dependency]:
        with self._lock:
            return list(self.depends)

    def remove_dependency(self, target: str) -> None:
        """Drop every edge, pending or resolved, recorded for ``target``."""
        with self._lock:
            self.depends.discard_path(target)

    def resolve_dependency(self, pending: PendingDependency, real_path: str | None) -> None:
        """Promote ``pending`` to a resolved edge towards ``real_path``.

        Promoting twice is a no-op, so documents re-rendered during a
        reconciliation pass can resolve the same reference again.
        """
        if real_path is None:
            return
        with self._lock:
            if pending in self._resolved:
                return
            if not self.depends.promote(pending, real_path):
                raise DependencyResolutionError(
                    f"Could not find dependency '{pending.path}' in MetaEntry for '{self.file}'"
                )
            self._resolved.add(pending)
        logger.debug("resolved %s dependency %s -> %s", self.file, pending.path, real_path)

    def set_parent(self, parent: str | None) -> None:
        with self._lock:
            self.parent = parent

    def has_link(self, name: str) -> bool:
        return name in self.links


class Metas:
    """Process-wide table of :class:`MetaEntry` keyed by canonical file name."""

    def __init__(self, entries: Mapping[str, MetaEntry] | None = None) -> None:
        self._entries: dict[str, MetaEntry] = dict(entries or {})
        self._parents: dict[str, str] = {}
        self._lock = Lock()

    def get(self, file: str) -> MetaEntry | None:
        with self._lock:
            return self._entries.get(file)

    def get_all(self) -> dict[str, MetaEntry]:
        with self._lock:
            return dict(self._entries)

    def set(
        self,
        file: str,
        url: str,
        *,
        title: str = "",
        titles: Iterable[Title] = (),
        tocs: Iterable[Iterable[str]] = (),
        depends: Iterable[Dependency] = (),
        links: Mapping[str, str] | None = None,
        mtime: float = 0.0,
    ) -> MetaEntry:
        """Publish (or replace) the entry for ``file`` and wire toc parents."""
        toc_lists = [list(toc) for toc in tocs]
        entry = MetaEntry(
            file=file,
            url=url,
            title=title,
            titles=list(titles),
            tocs=toc_lists,
            depends=DependencySet.of(depends),
            links=dict(links or {}),
            mtime=mtime,
        )
        with self._lock:
            for toc in toc_lists:
                for child in toc:
                    self._parents[child] = file
                    child_entry = self._entries.get(child)
                    if child_entry is not None:
                        child_entry.set_parent(file)
            entry.parent = self._parents.get(file)
            self._entries[file] = entry
        logger.debug("published metadata for %s", file)
        return entry

    def find_link_meta_entry(self, name: str) -> MetaEntry | None:
        """Return the entry publishing the link or anchor ``name``."""
        normalised = name.strip().lower()
        with self._lock:
            for entry in self._entries.values():
                if entry.has_link(normalised):
                    return entry
        return None

    def find_by_title(self, title: str) -> list[MetaEntry]:
        with self._lock:
            return [entry for entry in self._entries.values() if entry.title == title]

    def pending_dependencies(self) -> dict[str, list[PendingDependency]]:
        """Return the edges still awaiting reconciliation, per document."""
        with self._lock:
            entries = list(self._entries.values())
        pending: dict[str, list[PendingDependency]] = {}
        for entry in entries:
            waiting = [dep for dep in entry.get_depends() if isinstance(dep, PendingDependency)]
            if waiting:
                pending[entry.file] = waiting
        return pending

    def dependents_of(self, file: str) -> list[str]:
        """Return the documents holding a resolved edge towards ``file``."""
        target = ResolvedDependency(file)
        with self._lock:
            entries = list(self._entries.values())
        return [entry.file for entry in entries if target in entry.get_depends()]

    def __contains__(self, file: object) -> bool:
        with self._lock:
            return file in self._entries

    def __iter__(self) -> Iterator[MetaEntry]:
        return iter(self.get_all().values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["MetaEntry", "Metas", "Title"]
