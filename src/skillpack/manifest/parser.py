"""Locate, read, and split a skill's ``SKILL.md`` manifest.

A manifest looks like::

    ---
    name: pdf-tools
    description: Extract text and tables from PDF files
    ---
    # PDF Tools
    ...

The block between the opening ``---`` and the next line starting with
``---`` is parsed with :func:`yaml.safe_load`; everything after the closing
delimiter is the body.

:func:`parse_manifest` never raises for bad input. It returns a
:class:`~skillpack.models.ManifestDocument` on success, a
:class:`~skillpack.models.PathError` when the manifest cannot be found or
read, or a :class:`~skillpack.models.MalformedManifest` when the file
exists but is not well-formed frontmatter.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import yaml

from skillpack.models import MalformedManifest, ManifestDocument, PathError

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
"""Fixed manifest file name at the root of every skill directory."""

FRONTMATTER_DELIMITER = "---"


def resolve_skill_dir(skill_path: str | Path) -> Union[tuple[Path, Path], PathError]:
    """Resolve *skill_path* to ``(skill_dir, manifest_path)``.

    *skill_path* may point at the skill directory or directly at its
    ``SKILL.md``; in the latter case the parent directory is the skill
    directory.

    Returns:
        The absolute skill directory and manifest path, or a
        :class:`~skillpack.models.PathError` describing why the path is
        unusable.
    """
    if not str(skill_path).strip():
        return PathError(message="Skill path cannot be empty")

    absolute = Path(skill_path).expanduser().resolve()

    try:
        if absolute.is_dir():
            skill_dir = absolute
            manifest_path = absolute / SKILL_FILENAME
        elif absolute.is_file():
            if absolute.name != SKILL_FILENAME:
                return PathError(
                    message=(
                        f"Expected path to skill directory or {SKILL_FILENAME} file, "
                        f'got "{absolute.name}"'
                    ),
                    path=absolute,
                )
            skill_dir = absolute.parent
            manifest_path = absolute
        elif absolute.exists():
            return PathError(
                message=f"Path is neither a file nor a directory: {absolute}",
                path=absolute,
            )
        else:
            return PathError(message=f"Path does not exist: {absolute}", path=absolute)

        if not manifest_path.exists():
            return PathError(
                message=f"{SKILL_FILENAME} not found in skill directory: {skill_dir}",
                path=skill_dir,
            )
        if not manifest_path.is_file():
            return PathError(
                message=f"{SKILL_FILENAME} exists but is not a file: {manifest_path}",
                path=manifest_path,
            )
    except OSError as exc:
        return PathError(message=f"Failed to access {absolute}: {exc}", path=absolute)

    return skill_dir, manifest_path


def parse_manifest(
    skill_path: str | Path,
) -> Union[ManifestDocument, PathError, MalformedManifest]:
    """Read and split the manifest of the skill at *skill_path*.

    Args:
        skill_path: Skill directory, or the ``SKILL.md`` file inside it.

    Returns:
        A :class:`~skillpack.models.ManifestDocument` when the file holds
        delimited, syntactically valid YAML frontmatter (of any shape);
        otherwise the stage error describing the problem.
    """
    resolved = resolve_skill_dir(skill_path)
    if isinstance(resolved, PathError):
        return resolved
    skill_dir, manifest_path = resolved

    try:
        content = manifest_path.read_text(encoding="utf-8")
    except PermissionError:
        return PathError(
            message=f"Permission denied reading {SKILL_FILENAME}: {manifest_path}",
            path=manifest_path,
        )
    except UnicodeDecodeError as exc:
        return MalformedManifest(
            message=f"{SKILL_FILENAME} is not valid UTF-8: {exc.reason}",
            path=manifest_path,
        )
    except OSError as exc:
        return PathError(
            message=f"Failed to read {manifest_path}: {exc}", path=manifest_path
        )

    logger.debug("Read %d characters from %s", len(content), manifest_path)
    return parse_content(content, skill_dir=skill_dir, manifest_path=manifest_path)


def parse_content(
    content: str, skill_dir: Path, manifest_path: Path
) -> Union[ManifestDocument, MalformedManifest]:
    """Split *content* into frontmatter and body and parse the frontmatter.

    Args:
        content: Full text of ``SKILL.md``.
        skill_dir: Directory the manifest belongs to.
        manifest_path: Location of the manifest, used in messages.

    Returns:
        The parsed document, or a
        :class:`~skillpack.models.MalformedManifest`.
    """

    def _malformed(message: str) -> MalformedManifest:
        return MalformedManifest(message=message, path=manifest_path)

    if not content.strip():
        return _malformed(f"{SKILL_FILENAME} is empty")

    text = content.lstrip()
    if not text.startswith(FRONTMATTER_DELIMITER):
        return _malformed(
            f'Missing YAML frontmatter. {SKILL_FILENAME} must start with "{FRONTMATTER_DELIMITER}"'
        )

    after_opening = text[len(FRONTMATTER_DELIMITER):]
    closing = after_opening.find(f"\n{FRONTMATTER_DELIMITER}")
    if closing == -1:
        if after_opening.strip().startswith(FRONTMATTER_DELIMITER):
            return _malformed("Frontmatter cannot be empty")
        return _malformed(
            f'Unclosed YAML frontmatter. Missing closing "{FRONTMATTER_DELIMITER}"'
        )

    raw_frontmatter = after_opening[:closing].strip()
    if not raw_frontmatter:
        return _malformed("Frontmatter cannot be empty")

    try:
        data = yaml.safe_load(raw_frontmatter)
    except yaml.YAMLError as exc:
        return _malformed(f"Invalid YAML frontmatter: {exc}")

    body_start = closing + len(f"\n{FRONTMATTER_DELIMITER}")
    body = after_opening[body_start:].strip()

    return ManifestDocument(
        skill_dir=skill_dir,
        manifest_path=manifest_path,
        frontmatter=data,
        raw_frontmatter=raw_frontmatter,
        body=body,
    )
