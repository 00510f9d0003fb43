"""Schemas for finisher options and requests."""

import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from attach_files.schemas.forms import FormElement


# Leading integer of a string option, e.g. "42abc" -> 42, "3.7" -> 3
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any) -> int:
    """Cast an option value to int; values without a leading integer are 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


class ElementColumnMapping(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    map_on_database_column: str | None = Field(None, alias="mapOnDatabaseColumn")


class AttachFilesToRecordOptions(BaseModel):
    """Options of the AttachFilesToRecord finisher.

    Keys follow the form configuration (``recordUid``, ``storagePid``,
    ``mapOnDatabaseColumn``); snake_case names are accepted as well.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    table: str = ""
    record_uid: int = Field(0, alias="recordUid")
    storage_pid: int = Field(0, alias="storagePid")
    elements: dict[str, ElementColumnMapping] = Field(default_factory=dict)

    @field_validator("table", mode="before")
    @classmethod
    def _table_to_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("record_uid", "storage_pid", mode="before")
    @classmethod
    def _to_int(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("elements", mode="before")
    @classmethod
    def _elements_defaults(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: (config or {}) for key, config in value.items()}
        return value

    @property
    def record_id(self) -> int:
        return self.record_uid

    def target_column(self, element_id: str) -> str:
        """Column an element maps onto; defaults to the element identifier."""
        mapping = self.elements.get(element_id)
        if mapping and mapping.map_on_database_column:
            return mapping.map_on_database_column
        return element_id


class AttachFilesRequest(BaseModel):
    options: dict[str, Any]
    elements: list[FormElement] = Field(default_factory=list)
    values: dict[str, int | list[int] | None] = Field(default_factory=dict)
    finisher_results: dict[str, dict[str, Any]] = Field(default_factory=dict)


class AttachFilesResponse(BaseModel):
    attached: dict[str, list[int]]
    reference_count: int
