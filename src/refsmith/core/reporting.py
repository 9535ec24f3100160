"""End-of-build summaries of references that failed to resolve."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .environment import Environment
from .exceptions import exception_hint
from .references import InvalidLink


def collect_invalid_links(environments: Iterable[Environment]) -> dict[str, list[InvalidLink]]:
    """Group the invalid links of every environment by document."""
    collected: dict[str, list[InvalidLink]] = {}
    for environment in environments:
        links = environment.get_invalid_links()
        if links:
            collected.setdefault(environment.get_current_file_name(), []).extend(links)
    return collected


def format_invalid_links_report(
    invalid_links: dict[str, list[InvalidLink]],
    errors: Mapping[str, BaseException] | None = None,
) -> str:
    """Render the grouped invalid links as a plain-text report.

    ``errors`` maps documents whose compilation failed to the raised exception;
    each is summarised by the most specific message of its cause chain.
    """
    failures = _format_failures(errors or {})
    if not invalid_links:
        return "\n".join(["No invalid references.", *failures])

    total = sum(len(links) for links in invalid_links.values())
    noun = "reference" if total == 1 else "references"
    lines = [f"{total} invalid {noun}:"]
    for file in sorted(invalid_links):
        lines.append(f"  {file}")
        for link in invalid_links[file]:
            section = f" ({link.section})" if link.section else ""
            lines.append(f"    - {link.name}{section}")
    lines.extend(failures)
    return "\n".join(lines)


def _format_failures(errors: Mapping[str, BaseException]) -> list[str]:
    if not errors:
        return []
    noun = "document" if len(errors) == 1 else "documents"
    lines = [f"{len(errors)} failed {noun}:"]
    for file in sorted(errors):
        hint = exception_hint(errors[file]) or type(errors[file]).__name__
        lines.append(f"  {file}: {hint}")
    return lines


__all__ = ["collect_invalid_links", "format_invalid_links_report"]
