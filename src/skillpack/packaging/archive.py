"""Write a skill directory into a single ``.skill`` archive.

The archive is a ZIP file. Every enumerated file is stored under a
top-level folder named after the skill::

    pdf-tools.skill
    └── pdf-tools/
        ├── SKILL.md
        └── scripts/extract.py

Entries are added in sorted order so that the same directory snapshot
always yields the same membership. The archive is first written to a temp
file next to the destination and then renamed into place, so a failed run
never leaves a truncated ``.skill`` behind and an existing archive is only
replaced once the new one is complete.
"""

from __future__ import annotations

import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Union

from skillpack.models import BuildError, BuildResult, SkillDirectory

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".skill"


def archive_path_for(output_dir: Path, name: str) -> Path:
    """Return the destination ``<output_dir>/<name>.skill``."""
    return output_dir / f"{name}{ARCHIVE_SUFFIX}"


def check_destination(
    output_dir: Path, name: str, force: bool = False
) -> Union[Path, BuildError]:
    """Verify that an archive for *name* may be written into *output_dir*.

    Returns:
        The absolute destination path, or a
        :class:`~skillpack.models.BuildError` when the output directory is
        missing or unwritable, or the destination already exists and
        *force* is not set.
    """
    output_dir = output_dir.resolve()
    if not output_dir.is_dir():
        return BuildError(
            message=f"Output directory does not exist or is not a directory: {output_dir}",
            path=output_dir,
        )
    if not os.access(output_dir, os.W_OK | os.X_OK):
        return BuildError(
            message=f"Output directory is not writable: {output_dir}", path=output_dir
        )

    destination = archive_path_for(output_dir, name)
    if destination.is_dir():
        return BuildError(
            message=f"Destination exists and is a directory: {destination}",
            path=destination,
        )
    if destination.exists() and not force:
        return BuildError(
            message=f"Package already exists: {destination}. Use --force to overwrite.",
            path=destination,
        )
    return destination


def build_archive(
    skill: SkillDirectory,
    name: str,
    output_dir: Path,
    force: bool = False,
) -> Union[BuildResult, BuildError]:
    """Write every file of *skill* into ``<output_dir>/<name>.skill``.

    Args:
        skill: The enumerated skill directory. Never modified.
        name: Validated skill name; becomes the archive base name and the
            top-level folder inside the archive.
        output_dir: Existing, writable directory for the archive.
        force: Replace an existing archive instead of failing.

    Returns:
        A :class:`~skillpack.models.BuildResult` with the absolute archive
        path, or a :class:`~skillpack.models.BuildError`.
    """
    destination = check_destination(output_dir, name, force=force)
    if isinstance(destination, BuildError):
        return destination

    try:
        _write_archive(skill, name, destination)
        size = destination.stat().st_size
    except OSError as exc:
        failed = exc.filename or destination
        return BuildError(
            message=f"Failed to create package {destination}: {exc.strerror or exc} ({failed})",
            path=Path(failed),
        )

    logger.debug("Wrote %s (%d files, %d bytes)", destination, len(skill.files), size)
    return BuildResult(archive_path=destination, file_count=len(skill.files), size=size)


def _write_archive(skill: SkillDirectory, name: str, destination: Path) -> None:
    """Write the archive atomically using temp file + rename.

    The temporary file is created in the destination directory so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the error propagates.
    """
    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
            delete=False,
        ) as fd:
            tmp_path = fd.name
            with zipfile.ZipFile(
                fd, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
            ) as zf:
                for relative in skill.files:
                    logger.debug("Adding %s", relative)
                    zf.write(skill.root / relative, arcname=f"{name}/{relative}")
            fd.flush()
            os.fsync(fd.fileno())
        # mkstemp creates 0600 files; archives are meant to be shared.
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, destination)
        tmp_path = None
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
