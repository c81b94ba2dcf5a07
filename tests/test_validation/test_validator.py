"""Tests for skillpack.validation.validator -- whole-manifest validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from skillpack.models import ManifestDocument, PathError, SkillManifest, ValidationResult
from skillpack.validation import validate_manifest, validate_skill


def _doc(frontmatter: Any, skill_dir: str = "test-pkg", body: str = "") -> ManifestDocument:
    root = Path("/skills") / skill_dir
    return ManifestDocument(
        skill_dir=root,
        manifest_path=root / "SKILL.md",
        frontmatter=frontmatter,
        body=body,
    )


class TestValidateManifest:
    def test_minimal_manifest_is_valid(self) -> None:
        result = validate_manifest(_doc({"name": "test-pkg"}))
        assert result.is_valid
        assert isinstance(result.manifest, SkillManifest)
        assert result.manifest.name == "test-pkg"

    def test_missing_description_is_only_a_warning(self) -> None:
        result = validate_manifest(_doc({"name": "test-pkg"}))
        assert result.is_valid
        assert any("description" in w for w in result.warnings)

    def test_full_manifest_maps_aliases(self) -> None:
        result = validate_manifest(
            _doc(
                {
                    "name": "test-pkg",
                    "description": "Does things",
                    "allowed-tools": ["Read", "Grep"],
                    "user-invocable": True,
                    "permissionMode": "default",
                    "memory": "project",
                    "metadata": {"author": "me"},
                }
            )
        )
        assert result.is_valid, result.violations
        manifest = result.manifest
        assert manifest is not None
        assert manifest.allowed_tools == ["Read", "Grep"]
        assert manifest.user_invocable is True
        assert manifest.permission_mode == "default"
        assert manifest.memory == "project"
        assert result.warnings == ()

    def test_missing_name(self) -> None:
        result = validate_manifest(_doc({"bad": "yaml"}))
        assert not result.is_valid
        assert result.violations == ("Missing required field: name",)
        assert result.manifest is None

    @pytest.mark.parametrize("frontmatter", [None, {}])
    def test_empty_frontmatter(self, frontmatter: Any) -> None:
        result = validate_manifest(_doc(frontmatter))
        assert result.violations == ("Frontmatter cannot be empty",)

    @pytest.mark.parametrize(
        "frontmatter, kind",
        [(["a", "b"], "list"), ("just text", "string"), (42, "integer")],
    )
    def test_wrong_shape_is_a_violation(self, frontmatter: Any, kind: str) -> None:
        result = validate_manifest(_doc(frontmatter))
        assert not result.is_valid
        assert result.violations == (
            f"Frontmatter must be a YAML mapping of key-value pairs (got {kind})",
        )

    def test_reports_every_violation_in_order(self) -> None:
        result = validate_manifest(
            _doc(
                {
                    "name": "Bad_Name",
                    "description": 12,
                    "context": "spawn",
                    "user-invocable": "yes",
                }
            )
        )
        assert len(result.violations) == 4
        assert "lowercase letters" in result.violations[0]
        assert "description" in result.violations[1]
        assert "context" in result.violations[2]
        assert "user-invocable" in result.violations[3]

    def test_null_optional_field_is_ignored(self) -> None:
        result = validate_manifest(_doc({"name": "test-pkg", "license": None}))
        assert result.is_valid

    def test_unknown_keys_warn_by_default(self) -> None:
        result = validate_manifest(_doc({"name": "test-pkg", "author": "me"}))
        assert result.is_valid
        assert "Unknown frontmatter keys (ignored): author" in result.warnings
        assert result.manifest is not None
        assert result.manifest.extra_fields == {"author": "me"}

    def test_snake_case_spelling_is_an_unknown_key(self) -> None:
        result = validate_manifest(
            _doc({"name": "test-pkg", "permission_mode": 5, "user_invocable": "maybe"})
        )
        assert result.is_valid, result.violations
        assert result.manifest is not None
        assert result.manifest.permission_mode is None
        assert result.manifest.user_invocable is None
        assert result.manifest.extra_fields == {"permission_mode": 5, "user_invocable": "maybe"}

    def test_unknown_keys_fail_when_strict(self) -> None:
        result = validate_manifest(
            _doc({"name": "test-pkg", "author": "me"}), allow_unknown_fields=False
        )
        assert not result.is_valid
        assert result.violations[0].startswith("Unexpected frontmatter keys: author.")

    def test_directory_mismatch_warns(self) -> None:
        result = validate_manifest(_doc({"name": "other-name"}, skill_dir="test-pkg"))
        assert result.is_valid
        assert any('does not match directory name "test-pkg"' in w for w in result.warnings)

    def test_advisory_warnings(self) -> None:
        result = validate_manifest(
            _doc(
                {
                    "name": "test-pkg",
                    "description": "d",
                    "hooks": {"OnSave": "make"},
                    "model": "gpt-9",
                }
            )
        )
        assert result.is_valid
        assert len(result.warnings) == 2

    def test_non_string_metadata_keys(self) -> None:
        result = validate_manifest(_doc({"name": "test-pkg", "metadata": {1: "one"}}))
        assert not result.is_valid
        assert result.violations[0].startswith("Field 'metadata")


class TestValidateSkill:
    def test_valid_directory(self, make_skill) -> None:
        result = validate_skill(make_skill())
        assert isinstance(result, ValidationResult)
        assert result.is_valid

    def test_malformed_manifest_is_single_violation(self, make_skill) -> None:
        result = validate_skill(make_skill(manifest="no frontmatter"))
        assert isinstance(result, ValidationResult)
        assert len(result.violations) == 1
        assert "Missing YAML frontmatter" in result.violations[0]

    def test_missing_path(self, tmp_path: Path) -> None:
        result = validate_skill(tmp_path / "missing")
        assert isinstance(result, PathError)

    def test_strict_flag_passes_through(self, make_skill) -> None:
        skill = make_skill(manifest="---\nname: test-pkg\nauthor: me\n---\n")
        assert validate_skill(skill).is_valid
        assert not validate_skill(skill, allow_unknown_fields=False).is_valid
