"""Configuration models consumed by the compilation core.

EnvironmentConfig

`base_url` (`str | None`)
: Absolute URL prefix used when generating links to other documents. When
  set, generated URLs are absolute instead of relative to the current file.

`use_relative_urls` (`bool`)
: Generate links relative to the document being compiled. When `False` and no
  `base_url` is configured, canonical paths are returned as-is.

`file_extension` (`str`)
: Extension appended to document names when publishing their output URL.
  Leading dots are ignored, so `.html` and `html` are equivalent.

`ignore_invalid_references` (`bool`)
: Keep recording unresolved references as invalid links but do not warn about
  them through the diagnostics sink.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnvironmentConfig(BaseModel):
    """Output layout and reporting settings shared by every environment."""

    model_config = ConfigDict(extra="forbid")

    base_url: str | None = None
    use_relative_urls: bool = True
    file_extension: str = Field(default="html", description="Output file extension")
    ignore_invalid_references: bool = False

    @field_validator("file_extension", mode="before")
    @classmethod
    def _strip_dot(cls, value: object) -> str:
        candidate = value if isinstance(value, str) else str(value)
        return candidate.strip().lstrip(".")

    @field_validator("base_url", mode="before")
    @classmethod
    def _coerce_base_url(cls, value: object) -> str | None:
        if value is None:
            return None
        candidate = value if isinstance(value, str) else str(value)
        stripped = candidate.strip()
        return stripped or None

    def output_url(self, name: str) -> str:
        """Return the published URL for a document name."""
        if not self.file_extension:
            return name
        return f"{name}.{self.file_extension}"

    def base_url_for(self, path: str) -> str | None:
        """Join ``path`` onto the configured base URL when one is set."""
        if self.base_url is None:
            return None
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


__all__ = ["EnvironmentConfig"]
