"""Field-level rules for ``SKILL.md`` frontmatter.

Every rule is a plain function taking the raw YAML value of one field and
returning an error message, or ``None`` when the value is acceptable. Rules
for optional fields are only consulted when the key is present with a
non-null value; see :data:`FIELD_RULES`.

Advisory checks that never make a skill invalid live in the ``*_warnings``
helpers at the bottom of the module.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Optional

RuleCheck = Callable[[Any], Optional[str]]

NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
NAME_MAX_LENGTH = 64
RESERVED_WORDS = ("anthropic", "claude")

DESCRIPTION_MAX_LENGTH = 1024
COMPATIBILITY_MAX_LENGTH = 500
ARGUMENT_HINT_MAX_LENGTH = 200

MEMORY_VALUES = ("user", "project", "local")
COLOR_VALUES = ("blue", "cyan", "green", "yellow", "magenta", "red")
KNOWN_HOOKS = ("PreToolUse", "PostToolUse", "Stop")
KNOWN_MODELS = ("inherit", "sonnet", "opus", "haiku")
HOOK_CONFIG_KEYS = frozenset({"type", "command", "matcher", "hooks", "once"})

BODY_LINE_THRESHOLD = 500
BODY_TOKEN_THRESHOLD = 5000
CHARS_PER_TOKEN = 4

_DISPLAY_LIMIT = 50


def type_name(value: Any) -> str:
    """Return the YAML-flavoured type name of *value* for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "mapping"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


def _truncate(value: str) -> str:
    if len(value) <= _DISPLAY_LIMIT:
        return value
    return value[:_DISPLAY_LIMIT] + "..."


def is_blank(value: Any) -> bool:
    """True for ``None`` and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


# --- Required fields ---


def check_name(value: Any) -> Optional[str]:
    """Validate the skill name, which doubles as the archive file name.

    Lowercase letters, digits and single hyphens only; this also rules out
    path separators, dots and whitespace, so the name is always a safe
    filename component.
    """
    if is_blank(value):
        return "Missing required field: name"
    if not isinstance(value, str):
        return f'Field \'name\' must be a string. Got type "{type_name(value)}".'
    if len(value) > NAME_MAX_LENGTH:
        return f"Skill name must be {NAME_MAX_LENGTH} characters or less (got {len(value)})"
    if "/" in value or "\\" in value:
        return f'Skill name cannot contain path separators (got "{_truncate(value)}")'
    if not NAME_PATTERN.match(value):
        return (
            "Skill name must contain only lowercase letters, numbers, and hyphens. "
            "Cannot start or end with a hyphen, or have consecutive hyphens. "
            f'Example: "my-skill-name" (got "{_truncate(value)}")'
        )
    for reserved in RESERVED_WORDS:
        if reserved in value:
            return f'Skill name cannot contain reserved word "{reserved}"'
    return None


# --- Optional fields ---


def check_description(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return f'Field \'description\' must be a string. Got type "{type_name(value)}".'
    if not value.strip():
        return "Description cannot be empty"
    if len(value) > DESCRIPTION_MAX_LENGTH:
        return (
            f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less "
            f"(got {len(value)})"
        )
    if "<" in value or ">" in value:
        return "Description cannot contain angle brackets (< or >)"
    return None


def check_compatibility(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return "Compatibility field must be a string"
    if not value.strip():
        return "Compatibility field cannot be empty when present"
    if len(value) > COMPATIBILITY_MAX_LENGTH:
        return (
            f"Compatibility field must be {COMPATIBILITY_MAX_LENGTH} characters or less "
            f"(got {len(value)})"
        )
    return None


def string_rule(field: str, max_length: Optional[int] = None) -> RuleCheck:
    """Build a rule requiring a non-empty string, optionally length-capped."""

    def check(value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return (
                f"Field '{field}' must be a non-empty string if specified. "
                f'Got type "{type_name(value)}".'
            )
        if not value.strip():
            return f"Field '{field}' must be a non-empty string if specified."
        if max_length is not None and len(value) > max_length:
            return (
                f"Field '{field}' must be at most {max_length} characters. "
                f"Got {len(value)} characters."
            )
        return None

    return check


def boolean_rule(field: str) -> RuleCheck:
    """Build a rule requiring ``true`` or ``false``."""

    def check(value: Any) -> Optional[str]:
        if not isinstance(value, bool):
            return (
                f"Field '{field}' must be a boolean (true or false). "
                f'Got type "{type_name(value)}".'
            )
        return None

    return check


def choice_rule(field: str, choices: tuple[str, ...]) -> RuleCheck:
    """Build a rule requiring one of a fixed set of strings."""

    def check(value: Any) -> Optional[str]:
        allowed = ", ".join(choices)
        if not isinstance(value, str):
            return f"Field '{field}' must be one of: {allowed}. Got type \"{type_name(value)}\"."
        if value not in choices:
            return f"Field '{field}' must be one of: {allowed}. Got \"{_truncate(value)}\"."
        return None

    return check


def string_list_rule(field: str) -> RuleCheck:
    """Build a rule accepting a non-empty string or a list of non-empty strings.

    Used for tool permission lists (``allowed-tools``, ``tools``,
    ``disallowedTools``) and for ``skills``.
    """

    def check(value: Any) -> Optional[str]:
        if isinstance(value, str):
            if not value.strip():
                return f"Field '{field}' must be a non-empty string or a list of strings."
            return None
        if isinstance(value, list):
            for index, entry in enumerate(value):
                if not isinstance(entry, str):
                    return (
                        f"Field '{field}' list must contain only strings. "
                        f"Found {type_name(entry)} at index {index}."
                    )
                if not entry.strip():
                    return (
                        f"Field '{field}' list contains an empty string at index {index}. "
                        "Each entry must be non-empty."
                    )
            return None
        return (
            f"Field '{field}' must be a string or a list of strings. "
            f'Got type "{type_name(value)}".'
        )

    return check


def check_license(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return f'Field \'license\' must be a string. Got type "{type_name(value)}".'
    return None


def check_metadata(value: Any) -> Optional[str]:
    if not isinstance(value, dict):
        return f'Field \'metadata\' must be a mapping. Got type "{type_name(value)}".'
    return None


def check_context(value: Any) -> Optional[str]:
    if value != "fork":
        return f'Field \'context\' must be "fork" if specified, got "{_truncate(str(value))}".'
    return None


def _is_hook_config(entry: Any) -> bool:
    return isinstance(entry, dict) and bool(HOOK_CONFIG_KEYS.intersection(entry))


def _is_valid_hook_value(value: Any) -> bool:
    if isinstance(value, str):
        return True
    if isinstance(value, list):
        return all(isinstance(item, str) for item in value) or all(
            _is_hook_config(item) for item in value
        )
    return False


def check_hooks(value: Any) -> Optional[str]:
    if not isinstance(value, dict):
        return "Field 'hooks' must be a mapping if specified."
    for key, hook_value in value.items():
        if not _is_valid_hook_value(hook_value):
            return (
                f"Hook '{key}' must be a string, list of strings, "
                "or list of hook config objects."
            )
    return None


FIELD_RULES: dict[str, RuleCheck] = {
    "description": check_description,
    "license": check_license,
    "compatibility": check_compatibility,
    "allowed-tools": string_list_rule("allowed-tools"),
    "metadata": check_metadata,
    "context": check_context,
    "agent": string_rule("agent"),
    "hooks": check_hooks,
    "user-invocable": boolean_rule("user-invocable"),
    "memory": choice_rule("memory", MEMORY_VALUES),
    "skills": string_list_rule("skills"),
    "model": string_rule("model"),
    "permissionMode": string_rule("permissionMode"),
    "disallowedTools": string_list_rule("disallowedTools"),
    "argument-hint": string_rule("argument-hint", ARGUMENT_HINT_MAX_LENGTH),
    "keep-coding-instructions": boolean_rule("keep-coding-instructions"),
    "tools": string_list_rule("tools"),
    "color": choice_rule("color", COLOR_VALUES),
    "disable-model-invocation": boolean_rule("disable-model-invocation"),
    "version": string_rule("version"),
}
"""Rules for optional fields, in the order violations are reported."""

KNOWN_FIELDS: frozenset[str] = frozenset({"name", *FIELD_RULES})


# --- Warnings ---


def hook_warnings(value: Any) -> list[str]:
    if not isinstance(value, dict):
        return []
    return [
        f"Unknown hook '{key}' in hooks field. Known hooks: {', '.join(KNOWN_HOOKS)}"
        for key in value
        if key not in KNOWN_HOOKS
    ]


def model_warnings(value: Any) -> list[str]:
    if isinstance(value, str) and value.strip() and value not in KNOWN_MODELS:
        return [
            f"Unknown model '{_truncate(value)}' in model field. "
            f"Known models: {', '.join(KNOWN_MODELS)}"
        ]
    return []


def body_size_warnings(body: str) -> list[str]:
    """Flag manifest bodies large enough to crowd an agent's context."""
    if not body.strip():
        return []
    warnings: list[str] = []
    line_count = len(body.split("\n"))
    if line_count > BODY_LINE_THRESHOLD:
        warnings.append(
            f"Skill body has {line_count} lines (recommended: under {BODY_LINE_THRESHOLD}). "
            "Large skills may consume excessive context."
        )
    estimated_tokens = math.ceil(len(body) / CHARS_PER_TOKEN)
    if estimated_tokens > BODY_TOKEN_THRESHOLD:
        warnings.append(
            f"Skill body has approximately {estimated_tokens} tokens "
            f"(recommended: under {BODY_TOKEN_THRESHOLD}). "
            "Large skills may consume excessive context."
        )
    return warnings
