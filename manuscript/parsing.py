"""Token parsing helpers shared by the YAML and environment config loaders."""

from __future__ import annotations


_BOOLEAN_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def normalize_optional_string(value: object) -> str | None:
    """Return `value` as stripped text, or `None` when it is missing or blank."""

    text = "" if value is None else str(value).strip()
    return text or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse `true`/`false`, `1`/`0`, `yes`/`no`, `on`/`off` in any case.

    Real booleans pass through unchanged. Blank or unrecognized tokens
    return `None` so callers can word their own error message.
    """

    if isinstance(value, bool):
        return value
    token = normalize_optional_string(value)
    if token is None:
        return None
    return _BOOLEAN_TOKENS.get(token.lower())
