from dataclasses import dataclass, field

import pytest

from refsmith.core.config import EnvironmentConfig
from refsmith.core.dependencies import PendingDependency, ResolvedDependency
from refsmith.core.diagnostics import RecordingEmitter
from refsmith.core.environment import Environment
from refsmith.core.exceptions import UnknownReferenceSectionError
from refsmith.core.metas import Metas
from refsmith.core.references import (
    DocReference,
    InvalidLink,
    RefReference,
    Reference,
    ReferenceRegistry,
    ResolvedReference,
    default_registry,
)


@dataclass
class StubReference:
    targets: dict[str, str] = field(default_factory=dict)
    seen: list[str] = field(default_factory=list)

    def resolve(self, environment: Environment, data: str) -> ResolvedReference | None:
        file = self.targets.get(data)
        if file is None:
            return None
        return ResolvedReference(file=file, title=data.title(), url=f"{file}.html")

    def found(self, environment: Environment, data: str) -> None:
        self.seen.append(data)


@pytest.fixture
def metas() -> Metas:
    return Metas()


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def env(metas: Metas, emitter: RecordingEmitter) -> Environment:
    return Environment("index", metas, registry=ReferenceRegistry(), emitter=emitter)


def test_stub_satisfies_reference_protocol() -> None:
    assert isinstance(StubReference(), Reference)
    assert isinstance(DocReference(), Reference)
    assert isinstance(RefReference(), Reference)


def test_registering_a_section_again_replaces_the_resolver(env: Environment) -> None:
    first = StubReference({"a": "first"})
    second = StubReference({"a": "second"})
    env.register_resolver("term", first)
    env.register_resolver("term", second)

    resolved = env.resolve("term", "a")

    assert resolved is not None
    assert resolved.file == "second"
    assert env.get_registry().sections() == ["term"]


def test_unknown_section_is_structural_error(env: Environment) -> None:
    with pytest.raises(UnknownReferenceSectionError) as excinfo:
        env.resolve("nope", "target")

    assert excinfo.value.section == "nope"
    assert isinstance(excinfo.value, LookupError)
    assert env.get_invalid_links() == []


def test_unresolved_target_is_recorded_and_dependency_dropped(
    env: Environment, metas: Metas, emitter: RecordingEmitter
) -> None:
    env.register_resolver("term", StubReference())
    env.add_dependency("other")
    env.add_dependency("missing", requires_resolving=True)
    env.publish(title="Home")

    assert env.resolve("term", "missing") is None

    assert env.get_invalid_links() == [InvalidLink("missing", section="term", file="index")]
    assert env.get_dependencies() == [ResolvedDependency("other")]
    entry = metas.get("index")
    assert entry is not None
    assert entry.get_depends() == [ResolvedDependency("other")]
    assert emitter.warnings == ["Found invalid reference 'missing' in file 'index'"]
    assert emitter.consume_events("invalid_link") == [
        {"target": "missing", "section": "term", "file": "index"}
    ]


def test_each_failed_resolution_adds_one_invalid_link(env: Environment) -> None:
    env.register_resolver("term", StubReference())

    env.resolve("term", "x")
    env.resolve("term", "x")

    assert len(env.get_invalid_links()) == 2


def test_ignored_invalid_references_are_still_recorded(metas: Metas) -> None:
    emitter = RecordingEmitter()
    env = Environment(
        "index",
        metas,
        config=EnvironmentConfig(ignore_invalid_references=True),
        emitter=emitter,
    )
    env.register_resolver("term", StubReference())

    env.resolve("term", "missing")

    assert len(env.get_invalid_links()) == 1
    assert emitter.warnings == []
    assert len(emitter.consume_events("invalid_link")) == 1


def test_successful_resolution_promotes_pending_dependency(
    env: Environment, metas: Metas, emitter: RecordingEmitter
) -> None:
    env.register_resolver("term", StubReference({"glossary-api": "reference/glossary"}))
    env.add_dependency("glossary-api", requires_resolving=True)
    env.publish()

    resolved = env.resolve("term", "glossary-api")

    assert resolved is not None
    entry = metas.get("index")
    assert entry is not None
    assert entry.get_depends() == [ResolvedDependency("reference/glossary")]
    assert PendingDependency("glossary-api") not in entry.get_depends()
    assert env.get_dependencies() == [ResolvedDependency("reference/glossary")]
    assert emitter.consume_events("dependency_resolved") == [
        {"target": "glossary-api", "path": "reference/glossary", "file": "index"}
    ]


def test_resolution_without_published_entry_still_promotes_locally(env: Environment) -> None:
    env.register_resolver("term", StubReference({"a": "docs/a"}))
    env.add_dependency("a", requires_resolving=True)

    env.resolve("term", "a")

    assert env.get_dependencies() == [ResolvedDependency("docs/a")]


def test_found_dispatches_to_resolver(env: Environment) -> None:
    stub = StubReference()
    env.register_resolver("term", stub)

    env.found("term", "widget")

    assert stub.seen == ["widget"]


def test_found_with_unknown_section_reports_and_continues(
    env: Environment, emitter: RecordingEmitter
) -> None:
    env.found("nope", "widget")

    assert emitter.errors == ["Unknown reference section 'nope'"]
    assert env.get_invalid_links() == []


def test_doc_reference_resolves_published_document(metas: Metas) -> None:
    metas.set("guide/install", "guide/install.html", title="Install", titles=[("Install", 1)])
    env = Environment("guide/index", metas, registry=default_registry())

    resolved = env.resolve("doc", "install")

    assert resolved == ResolvedReference(
        file="guide/install",
        title="Install",
        url="install.html",
        titles=(("Install", 1),),
    )


def test_doc_reference_keeps_fragment(metas: Metas) -> None:
    metas.set("api/core", "api/core.html", title="Core")
    env = Environment("guide/index", metas, registry=default_registry())

    resolved = env.resolve("doc", "../api/core#functions")

    assert resolved is not None
    assert resolved.url == "../api/core.html#functions"


def test_doc_reference_found_records_resolved_dependency(metas: Metas) -> None:
    env = Environment("guide/index", metas, registry=default_registry())

    env.found("doc", "install#linux")

    assert env.get_dependencies() == [ResolvedDependency("guide/install")]


def test_doc_reference_to_missing_document_drops_dependency(metas: Metas) -> None:
    env = Environment("guide/index", metas, registry=default_registry())
    env.found("doc", "missing")

    assert env.resolve("doc", "missing") is None
    assert env.get_dependencies() == []
    assert env.get_invalid_links()[0].name == "missing"


def test_ref_reference_resolves_anchor_in_other_document(metas: Metas) -> None:
    metas.set("api/core", "api/core.html", title="Core", links={"core-api": ""})
    env = Environment("guide/index", metas, registry=default_registry())

    resolved = env.resolve("ref", "Core-API")

    assert resolved is not None
    assert resolved.file == "api/core"
    assert resolved.url == "../api/core.html#core-api"


def test_default_registry_sections() -> None:
    registry = default_registry()

    assert registry.sections() == ["doc", "ref"]
    assert "doc" in registry
    assert len(registry) == 2
    assert registry.get("term") is None
    with pytest.raises(UnknownReferenceSectionError):
        registry.require("term")


def test_doc_reference_falls_back_to_fragment_anchor(metas: Metas) -> None:
    metas.set("api/core", "api/core.html", title="Core", links={"functions": ""})
    env = Environment("guide/index", metas, registry=default_registry())

    resolved = env.resolve("doc", "missing#functions")

    assert resolved is not None
    assert resolved.file == "api/core"
    assert resolved.url == "../api/core.html#functions"
