"""Finisher execution context and option reference resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from attach_files.schemas.forms import FormDefinition
from attach_files.types import FormValues

# "{SaveToDatabase.insertedUids.0}": result of an earlier finisher
_RESULT_REFERENCE = re.compile(r"^\{([A-Za-z0-9_-]+)((?:\.[A-Za-z0-9_-]+)+)\}$")


@dataclass
class FinisherContext:
    """State shared by the finishers of one form submission."""

    form_definition: FormDefinition
    form_values: FormValues = field(default_factory=dict)
    finisher_results: dict[str, dict[str, Any]] = field(default_factory=dict)

    def add_result(self, finisher_identifier: str, key: str, value: Any) -> None:
        self.finisher_results.setdefault(finisher_identifier, {})[key] = value

    def resolve_option(self, value: Any) -> Any:
        """
        Resolve a reference to an earlier finisher's result.

        Only a value that consists of exactly one ``{Finisher.path}`` token is
        resolved; unknown finishers or paths resolve to "". Other values are
        returned unchanged.
        """
        if not isinstance(value, str):
            return value
        match = _RESULT_REFERENCE.match(value.strip())
        if not match:
            return value

        finisher_identifier = match.group(1)
        path = match.group(2).lstrip(".").split(".")
        if finisher_identifier not in self.finisher_results:
            return ""
        return _lookup_path(self.finisher_results[finisher_identifier], path)

    def resolve_options(self, options: dict[str, Any]) -> dict[str, Any]:
        return {key: self.resolve_option(value) for key, value in options.items()}


def _lookup_path(current: Any, path: list[str]) -> Any:
    for segment in path:
        if isinstance(current, dict):
            if segment not in current:
                return ""
            current = current[segment]
        elif isinstance(current, (list, tuple)):
            if not segment.isdigit() or int(segment) >= len(current):
                return ""
            current = current[int(segment)]
        else:
            return ""
    return current
