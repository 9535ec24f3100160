"""Pure URL arithmetic used to place documents and key the dependency graph.

Document names are slash-separated paths relative to the corpus root, without
extension (``guide/install``). A leading ``/`` anchors a path at the corpus
root instead of the directory of the current document.

Canonical paths are the node identity of the dependency graph, so
:func:`canonical_url` never merges two different targets: ``.`` and empty
segments are dropped, ``..`` consumes the previous segment and is kept verbatim
when it would climb above the corpus root.
"""

from __future__ import annotations

import posixpath
import re

from .config import EnvironmentConfig


_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def is_external(url: str) -> bool:
    """Return True when ``url`` carries a scheme such as ``https://``."""
    return bool(_SCHEME.match(url))


def canonicalize(url: str) -> str:
    """Collapse ``.``, ``..`` and empty segments of a slash-separated path."""
    stack: list[str] = []
    for part in url.split("/"):
        if part in {"", "."}:
            continue
        if part == "..":
            if stack and stack[-1] != "..":
                stack.pop()
            else:
                stack.append(part)
            continue
        stack.append(part)
    return "/".join(stack)


def canonical_url(dir_name: str, url: str) -> str | None:
    """Return the corpus-wide identity of ``url`` seen from ``dir_name``.

    ``None`` means the input does not name a document of the corpus: it is
    empty, external, or collapses to the corpus root itself.
    """
    url = url.strip()
    if not url or is_external(url):
        return None
    if url.startswith("/"):
        canonical = canonicalize(url[1:])
    elif dir_name:
        canonical = canonicalize(f"{dir_name}/{url}")
    else:
        canonical = canonicalize(url)
    return canonical or None


def absolute_url(dir_name: str, url: str) -> str:
    """Return ``url`` anchored at the corpus root."""
    if url.startswith("/") or is_external(url):
        return url
    return "/" + (canonical_url(dir_name, url) or "")


def _same_prefix(url: str, current_file_name: str) -> bool:
    part_a = url.split("/")
    part_b = current_file_name.split("/")
    if len(part_a) != len(part_b):
        return False
    return part_a[:-1] == part_b[:-1]


def relative_url(url: str | None, current_file_name: str) -> str | None:
    """Express a root-anchored ``url`` relative to ``current_file_name``.

    External and already relative URLs are returned unchanged.
    """
    if url is None:
        return None
    if is_external(url) or not url.startswith("/"):
        return url

    url = url[1:]
    if _same_prefix(url, current_file_name):
        return posixpath.basename(url)
    depth = current_file_name.count("/")
    return "../" * depth + url


class UrlGenerator:
    """Generate document URLs according to the configured output layout."""

    def __init__(self, config: EnvironmentConfig | None = None) -> None:
        self.config = config or EnvironmentConfig()

    def relative_url(self, url: str | None, current_file_name: str) -> str | None:
        return relative_url(url, current_file_name)

    def absolute_url(self, dir_name: str, url: str) -> str:
        return absolute_url(dir_name, url)

    def canonical_url(self, dir_name: str, url: str) -> str | None:
        return canonical_url(dir_name, url)

    def generate_url(self, path: str, current_file_name: str, dir_name: str) -> str:
        """Return the link to ``path`` as written in ``current_file_name``."""
        canonical = canonical_url(dir_name, path) or ""
        with_base = self.config.base_url_for(canonical)
        if with_base is not None:
            return with_base
        if self.config.use_relative_urls:
            return relative_url("/" + canonical, current_file_name) or ""
        return canonical


__all__ = [
    "UrlGenerator",
    "absolute_url",
    "canonical_url",
    "canonicalize",
    "is_external",
    "relative_url",
]
