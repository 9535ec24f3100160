from refsmith.core.config import EnvironmentConfig
from refsmith.core.urls import (
    UrlGenerator,
    absolute_url,
    canonical_url,
    canonicalize,
    is_external,
    relative_url,
)


def test_canonicalize_collapses_segments() -> None:
    assert canonicalize("a/./b/../c") == "a/c"
    assert canonicalize("a//b/") == "a/b"
    assert canonicalize("a/b/../../c") == "c"


def test_canonicalize_keeps_parents_above_root() -> None:
    assert canonicalize("../x") == "../x"
    assert canonicalize("a/../../x") == "../x"
    assert canonicalize("../../x") == "../../x"


def test_canonical_url_relative_to_directory() -> None:
    assert canonical_url("guide", "install") == "guide/install"
    assert canonical_url("guide", "../api/core") == "api/core"
    assert canonical_url("", "install") == "install"


def test_canonical_url_rooted_paths_ignore_directory() -> None:
    assert canonical_url("guide", "/index") == "index"
    assert canonical_url("guide", "/api/./core") == "api/core"


def test_canonical_url_distinguishes_outside_targets() -> None:
    assert canonical_url("", "../outside") == "../outside"
    assert canonical_url("", "../outside") != canonical_url("", "outside")


def test_canonical_url_rejects_non_documents() -> None:
    assert canonical_url("guide", "") is None
    assert canonical_url("guide", "   ") is None
    assert canonical_url("guide", "https://example.com/page") is None
    assert canonical_url("", "a/..") is None


def test_is_external() -> None:
    assert is_external("https://example.com")
    assert is_external("ftp://example.com/file")
    assert not is_external("/guide/install")
    assert not is_external("mailto:someone@example.com")


def test_absolute_url() -> None:
    assert absolute_url("guide", "intro") == "/guide/intro"
    assert absolute_url("guide", "../index") == "/index"
    assert absolute_url("guide", "/api") == "/api"
    assert absolute_url("", "https://example.com") == "https://example.com"


def test_relative_url_same_directory_uses_basename() -> None:
    assert relative_url("/guide/intro", "guide/index") == "intro"


def test_relative_url_climbs_to_root() -> None:
    assert relative_url("/api/core", "guide/index") == "../api/core"
    assert relative_url("/api/core", "guide/deep/index") == "../../api/core"
    assert relative_url("/guide/intro", "index") == "guide/intro"


def test_relative_url_leaves_other_urls_untouched() -> None:
    assert relative_url("https://example.com/a", "guide/index") == "https://example.com/a"
    assert relative_url("intro.html", "guide/index") == "intro.html"
    assert relative_url("#anchor", "guide/index") == "#anchor"
    assert relative_url(None, "guide/index") is None


def test_generate_url_defaults_to_relative() -> None:
    generator = UrlGenerator()
    assert generator.generate_url("intro", "guide/index", "guide") == "intro"
    assert generator.generate_url("/api/core", "guide/index", "guide") == "../api/core"


def test_generate_url_with_base_url() -> None:
    generator = UrlGenerator(EnvironmentConfig(base_url="https://docs.example.com/"))
    assert (
        generator.generate_url("intro", "guide/index", "guide")
        == "https://docs.example.com/guide/intro"
    )


def test_generate_url_canonical_when_relative_disabled() -> None:
    generator = UrlGenerator(EnvironmentConfig(use_relative_urls=False))
    assert generator.generate_url("intro", "guide/index", "guide") == "guide/intro"
