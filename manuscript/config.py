"""Configuration model and loaders for manuscript.

Responsibilities:
- Define sectioning settings as a typed dataclass.
- Build settings from a YAML file or from `MANUSCRIPT_*` environment variables.

Key types:
- `ManuscriptConfig`: normalized settings for section operations.
- `ConfigLoader`: static construction helpers for `ManuscriptConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_permissive_boolean


DEFAULT_MAX_SECTION_WORDS = 2000
DEFAULT_SECTION_TITLE_PREFIX = "Section"

_BOOLEAN_HINT = "(`true`/`false`, `1`/`0`, `yes`/`no`)"

# config field -> environment variable
_ENV_VARIABLES = {
    "max_section_words": "MANUSCRIPT_MAX_SECTION_WORDS",
    "section_title_prefix": "MANUSCRIPT_SECTION_TITLE_PREFIX",
    "log_operations": "MANUSCRIPT_LOG_OPERATIONS",
}


@dataclass(slots=True)
class ManuscriptConfig:
    """Settings for sectioning a document.

    Attributes:
        max_section_words: Word count above which a section is auto-split.
        section_title_prefix: Prefix for generated titles (`Section 1`, ...).
        log_operations: Whether section operations emit operation logs.
    """

    max_section_words: int = DEFAULT_MAX_SECTION_WORDS
    section_title_prefix: str = DEFAULT_SECTION_TITLE_PREFIX
    log_operations: bool = False

    def validate(self) -> None:
        """Reject settings the sectionizer cannot work with."""

        if isinstance(self.max_section_words, bool) or self.max_section_words <= 0:
            raise ValueError("`max_section_words` must be a positive integer.")
        if not isinstance(self.section_title_prefix, str) or not self.section_title_prefix.strip():
            raise ValueError("`section_title_prefix` must be a non-empty string.")


def _positive_int(raw_value: object, subject: str) -> int | None:
    """Parse a positive integer token; blank tokens yield `None`."""

    if isinstance(raw_value, bool):
        raise ValueError(f"{subject} must be a positive integer.")
    if isinstance(raw_value, int):
        parsed = raw_value
    else:
        token = normalize_optional_string(raw_value)
        if token is None:
            return None
        try:
            parsed = int(token)
        except ValueError as exc:
            raise ValueError(f"{subject} must be a positive integer.") from exc
    if parsed <= 0:
        raise ValueError(f"{subject} must be a positive integer.")
    return parsed


def _boolean(raw_value: object, subject: str) -> bool:
    """Parse a permissive boolean token or fail with the accepted spellings."""

    parsed = parse_permissive_boolean(raw_value)
    if parsed is None:
        raise ValueError(f"{subject} must be a boolean value {_BOOLEAN_HINT}.")
    return parsed


class ConfigLoader:
    """Factory methods for creating `ManuscriptConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(_ENV_VARIABLES)

    @staticmethod
    def from_yaml(path: Path) -> ManuscriptConfig:
        """Create a validated config from a YAML file.

        Raises:
            FileNotFoundError: If `path` does not exist.
            ValueError: If the file is not a YAML mapping, names unknown keys,
                or holds values of the wrong type.
        """

        payload = ConfigLoader._load_mapping(path)
        label = f"YAML `{path}`"

        unknown = sorted(
            str(key) for key in payload if key not in ConfigLoader._SUPPORTED_YAML_KEYS
        )
        if unknown:
            raise ValueError(f"{label} includes unsupported key(s): {', '.join(unknown)}.")

        def subject(key: str) -> str:
            return f"{label} field `{key}`"

        config = ManuscriptConfig(
            max_section_words=_positive_int(
                payload.get("max_section_words"), subject("max_section_words")
            )
            or DEFAULT_MAX_SECTION_WORDS,
            section_title_prefix=normalize_optional_string(payload.get("section_title_prefix"))
            or DEFAULT_SECTION_TITLE_PREFIX,
            log_operations=(
                _boolean(payload["log_operations"], subject("log_operations"))
                if "log_operations" in payload
                else False
            ),
        )
        config.validate()
        return config

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ManuscriptConfig:
        """Create a validated config from `MANUSCRIPT_*` environment variables.

        Unset or blank variables fall back to defaults.
        """

        env_map: Mapping[str, str] = os.environ if env is None else env

        def subject(key: str) -> str:
            return f"Environment variable `{_ENV_VARIABLES[key]}`"

        def raw(key: str) -> str | None:
            return normalize_optional_string(env_map.get(_ENV_VARIABLES[key]))

        log_token = raw("log_operations")
        config = ManuscriptConfig(
            max_section_words=_positive_int(
                raw("max_section_words"), subject("max_section_words")
            )
            or DEFAULT_MAX_SECTION_WORDS,
            section_title_prefix=raw("section_title_prefix") or DEFAULT_SECTION_TITLE_PREFIX,
            log_operations=(
                _boolean(log_token, subject("log_operations")) if log_token is not None else False
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _load_mapping(path: Path) -> Mapping[str, Any]:
        """Read a YAML file whose root must be a mapping; an empty file is `{}`."""

        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            return {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload
