"""Structured logging helpers (PHI-safe)."""

from typing import Any


def build_log_context(
    *,
    finisher: str | None = None,
    table: str | None = None,
    record_id: int | None = None,
    element_id: str | None = None,
) -> dict[str, Any]:
    """Return a PHI-safe log context dict.

    Only identifiers are logged, never submitted values or filenames.
    """
    context: dict[str, Any] = {}
    if finisher:
        context["finisher"] = finisher
    if table:
        context["table"] = table
    if record_id is not None:
        context["record_id"] = record_id
    if element_id:
        context["element_id"] = element_id
    return context
