"""Shared test fixtures for skillpack.

Provides reusable fixtures for building skill directories on disk, creating
isolated config environments, managing output state, and running CLI
commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import pytest

from skillpack.output import reset_output


SkillFactory = Callable[..., Path]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use. Handlers that --verbose attached to the
    package logger hold the same stale streams and are removed too.
    """
    yield
    reset_output()
    logger = logging.getLogger("skillpack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Skill directory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_skill(tmp_path: Path) -> SkillFactory:
    """Factory that writes a skill directory under ``tmp_path/skills``.

    Args (of the returned callable):
        name: Directory name.
        manifest: Full ``SKILL.md`` text, or ``None`` to omit the file.
        files: Extra files as ``{relative_path: content}``.

    Returns:
        The absolute skill directory.
    """

    def _make(
        name: str = "test-pkg",
        manifest: Optional[str] = "---\nname: test-pkg\ndescription: A test skill\n---\n# Test\n",
        files: Optional[dict[str, str]] = None,
    ) -> Path:
        skill_dir = tmp_path / "skills" / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if manifest is not None:
            (skill_dir / "SKILL.md").write_text(manifest, encoding="utf-8")
        for relative, content in (files or {}).items():
            path = skill_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def valid_skill(make_skill: SkillFactory) -> Path:
    """A valid ``test-pkg`` skill with one supporting script."""
    return make_skill(files={"scripts/run.py": "print('hello')\n"})


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config, forces the XDG layout, clears
    all SKILLPACK_* environment variables, and changes the working directory
    to ``tmp_path/work``.

    Returns:
        The working directory.
    """
    monkeypatch.setattr("skillpack.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["SKILLPACK_OUTPUT_DIR", "SKILLPACK_FORCE", "SKILLPACK_STRICT"]:
        monkeypatch.delenv(var, raising=False)

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner(monkeypatch: pytest.MonkeyPatch):
    """Typer CLI test runner with colour disabled.

    ``NO_COLOR`` keeps Rich markup out of captured output so assertions can
    match plain text.
    """
    from typer.testing import CliRunner

    monkeypatch.setenv("NO_COLOR", "1")
    return CliRunner()
