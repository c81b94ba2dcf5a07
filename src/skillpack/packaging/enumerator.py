"""Enumerate the regular files of a skill directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from skillpack.models import BuildError, SkillDirectory

logger = logging.getLogger(__name__)


def enumerate_skill(
    root: Path, exclude: Optional[Path] = None
) -> Union[SkillDirectory, BuildError]:
    """Collect every regular file under *root* as sorted relative POSIX paths.

    Symlinks are neither followed nor included, and neither are sockets,
    FIFOs or other special files.

    Args:
        root: Absolute skill directory.
        exclude: A single absolute file path to leave out, typically the
            destination archive when it is written inside the skill.

    Returns:
        The :class:`~skillpack.models.SkillDirectory`, or a
        :class:`~skillpack.models.BuildError` if part of the tree could not
        be listed or a file name cannot be stored in a ZIP archive.
    """
    errors: list[OSError] = []
    files: list[str] = []

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False, onerror=errors.append):
        dirnames.sort()
        current = Path(dirpath)
        for filename in sorted(filenames):
            path = current / filename
            if path.is_symlink() or not path.is_file():
                logger.debug("Skipping non-regular file %s", path)
                continue
            if exclude is not None and path == exclude:
                continue
            relative = path.relative_to(root).as_posix()
            try:
                relative.encode("utf-8")
            except UnicodeEncodeError:
                # ZIP entry names must be UTF-8.
                shown = os.fsencode(path).decode("utf-8", "backslashreplace")
                return BuildError(message=f"File name is not valid UTF-8: {shown}", path=path)
            files.append(relative)

    if errors:
        exc = errors[0]
        return BuildError(
            message=f"Failed to read skill directory {exc.filename or root}: {exc.strerror or exc}",
            path=Path(exc.filename) if exc.filename else root,
        )

    files.sort()
    logger.debug("Enumerated %d file(s) under %s", len(files), root)
    return SkillDirectory(root=root, files=tuple(files))
