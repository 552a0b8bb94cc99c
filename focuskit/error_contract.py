from __future__ import annotations

import re

__all__ = [
    "ACTIONABLE_ERROR_PATTERN",
    "format_actionable_error",
    "is_actionable_message",
    "require_choice",
]

ACTIONABLE_ERROR_PATTERN = re.compile(r"^[^:\n]+: .+\. Fix: .+\.$")


def _clean(value: object, default: str) -> str:
    text = str(value).strip()
    return text if text else default


def format_actionable_error(context: str, location: str, issue: str, hint: str) -> str:
    clean_context = str(context).strip()
    clean_location = _clean(location, "Unknown")
    clean_issue = _clean(issue, "unknown issue")
    clean_hint = _clean(hint, "review input and retry")
    if clean_context:
        return f"{clean_context} / {clean_location}: {clean_issue}. Fix: {clean_hint}."
    return f"{clean_location}: {clean_issue}. Fix: {clean_hint}."


def is_actionable_message(message: str) -> bool:
    return bool(ACTIONABLE_ERROR_PATTERN.match(str(message).strip()))


def require_choice(
    context: str,
    field_name: str,
    value: object,
    choices: tuple[str, ...],
) -> str:
    """Return `value` as a string when it is one of `choices`, else raise ValueError."""

    text = str(value).strip()
    if text in choices:
        return text
    allowed = ", ".join(repr(choice) for choice in choices)
    raise ValueError(
        format_actionable_error(
            context,
            field_name,
            f"unsupported value {text!r}",
            f"use one of {allowed}",
        )
    )
