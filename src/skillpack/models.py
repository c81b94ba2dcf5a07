"""Canonical Pydantic models shared across all skillpack modules.

This is the single source of truth for data shapes in the project. The
models fall into four groups:

**Configuration** -- serialised as JSON in the user's config directory:
    :class:`PackagingConfig`.

**Manifest** -- produced by the parser and the validator:
    :class:`ManifestDocument`, :class:`SkillManifest`,
    :class:`ValidationResult`.

**Stage results** -- explicit values returned by pipeline stages instead of
raised exceptions:
    :class:`SkillDirectory`, :class:`BuildResult`, and the stage errors
    :class:`PathError`, :class:`MalformedManifest`, :class:`BuildError`.

**Outcomes** -- the single value returned by
:func:`~skillpack.packaging.package_skill`:
    :class:`PackageSuccess`, :class:`ValidationFailure`,
    :class:`SystemFailure` (together :data:`PackagingOutcome`).

All result models are frozen; they are created once per run and never
mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from skillpack.exit_codes import (
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    EXIT_VALIDATION_FAILURE,
)


# --- Configuration ---


class PackagingConfig(BaseModel):
    """Persistent packaging defaults.

    Loaded from the global config file, layered with the project-local
    ``skillpack.json`` and ``SKILLPACK_*`` environment variables by
    :func:`~skillpack.config.resolve_config`.
    """

    output_dir: Optional[str] = Field(
        default=None,
        description="Default directory for produced archives (None = current directory)",
    )
    force: bool = Field(
        default=False, description="Overwrite existing archives by default"
    )
    allow_unknown_fields: bool = Field(
        default=True,
        description="Tolerate frontmatter keys outside the schema (reported as warnings)",
    )


# --- Manifest ---


class ManifestDocument(BaseModel):
    """A ``SKILL.md`` file split into frontmatter and body.

    ``frontmatter`` holds whatever PyYAML produced for the delimited block
    -- usually a dict, but possibly a list, a scalar, or ``None``. Deciding
    whether that shape is acceptable is the validator's job, not the
    parser's.
    """

    model_config = ConfigDict(frozen=True)

    skill_dir: Path
    manifest_path: Path
    frontmatter: Any = None
    raw_frontmatter: str = ""
    body: str = ""


class SkillManifest(BaseModel):
    """Typed view of a validated frontmatter mapping.

    Hyphenated YAML keys are exposed as snake_case attributes through
    aliases. Keys outside the schema are kept in ``model_extra`` so that
    newer manifests still round-trip through older tooling.
    Fields bind by their YAML spelling only: a ``permission_mode`` key is an
    unknown key, not ``permissionMode``.

    Example::

        SkillManifest.model_validate({"name": "pdf-tools", "user-invocable": True})
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    description: Optional[str] = None
    license: Optional[str] = None
    compatibility: Optional[str] = None
    allowed_tools: Optional[Union[str, list[str]]] = Field(default=None, alias="allowed-tools")
    metadata: Optional[dict[str, Any]] = None
    context: Optional[Literal["fork"]] = None
    agent: Optional[str] = None
    hooks: Optional[dict[str, Any]] = None
    user_invocable: Optional[bool] = Field(default=None, alias="user-invocable")
    memory: Optional[Literal["user", "project", "local"]] = None
    skills: Optional[Union[str, list[str]]] = None
    model: Optional[str] = None
    permission_mode: Optional[str] = Field(default=None, alias="permissionMode")
    disallowed_tools: Optional[Union[str, list[str]]] = Field(
        default=None, alias="disallowedTools"
    )
    argument_hint: Optional[str] = Field(default=None, alias="argument-hint")
    keep_coding_instructions: Optional[bool] = Field(
        default=None, alias="keep-coding-instructions"
    )
    tools: Optional[Union[str, list[str]]] = None
    color: Optional[Literal["blue", "cyan", "green", "yellow", "magenta", "red"]] = None
    disable_model_invocation: Optional[bool] = Field(
        default=None, alias="disable-model-invocation"
    )
    version: Optional[str] = None

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Frontmatter keys that are not part of the schema."""
        return dict(self.model_extra or {})


class ValidationResult(BaseModel):
    """Outcome of validating one manifest.

    Empty ``violations`` means the skill is valid. ``warnings`` are
    advisory and never affect validity.
    """

    model_config = ConfigDict(frozen=True)

    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    manifest: Optional[SkillManifest] = None

    @property
    def is_valid(self) -> bool:
        return not self.violations


# --- Stage results ---


class SkillDirectory(BaseModel):
    """A skill directory and the regular files found beneath it.

    ``files`` are relative POSIX paths, sorted, so that the same snapshot
    always enumerates identically.
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    files: tuple[str, ...] = ()


class BuildResult(BaseModel):
    """A written archive."""

    model_config = ConfigDict(frozen=True)

    archive_path: Path
    file_count: int
    size: int


class StageError(BaseModel):
    """Base for failures returned (not raised) by pipeline stages."""

    model_config = ConfigDict(frozen=True)

    message: str
    path: Optional[Path] = None


class PathError(StageError):
    """The skill path or its ``SKILL.md`` is absent or unreadable."""


class MalformedManifest(StageError):
    """``SKILL.md`` exists but cannot be split or parsed as YAML frontmatter."""


class BuildError(StageError):
    """The archive could not be written."""


# --- Outcomes ---


class PackageSuccess(BaseModel):
    """The archive was written."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    archive_path: Path
    file_count: int = 0
    size: int = 0
    warnings: tuple[str, ...] = ()

    @property
    def exit_code(self) -> int:
        return EXIT_SUCCESS


class ValidationFailure(BaseModel):
    """The manifest was malformed or broke at least one rule."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["validation_failure"] = "validation_failure"
    violations: tuple[str, ...]
    warnings: tuple[str, ...] = ()
    skill_path: Optional[Path] = None

    @property
    def exit_code(self) -> int:
        return EXIT_VALIDATION_FAILURE


class SystemFailure(BaseModel):
    """A filesystem or environment problem stopped the run.

    ``stage`` is ``"parse"`` when the skill path itself was unusable and
    ``"build"`` when the archive could not be assembled or written.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["system_failure"] = "system_failure"
    cause: str
    path: Optional[Path] = None
    stage: Literal["parse", "build"] = "build"

    @property
    def exit_code(self) -> int:
        return EXIT_SYSTEM_ERROR


PackagingOutcome = Union[PackageSuccess, ValidationFailure, SystemFailure]
"""Tagged union returned by :func:`~skillpack.packaging.package_skill`."""
