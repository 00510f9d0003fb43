"""Classify form elements for the attach-files finisher."""

from __future__ import annotations

from typing import Iterable

from attach_files.db.enums import UPLOAD_ELEMENT_KINDS, ElementKind, FormElementType
from attach_files.schemas.forms import FormDefinition, FormElement


def classify_element(element: FormElement | None) -> ElementKind:
    """Return the element kind; missing or unknown elements are OTHER."""
    if element is None:
        return ElementKind.OTHER
    try:
        element_type = FormElementType(element.type)
    except ValueError:
        return ElementKind.OTHER
    return UPLOAD_ELEMENT_KINDS.get(element_type, ElementKind.OTHER)


def is_upload_element(kind: ElementKind) -> bool:
    return kind in (ElementKind.UPLOAD_SINGLE, ElementKind.UPLOAD_MULTI)


def resolve_element_kinds(
    definition: FormDefinition, identifiers: Iterable[str]
) -> dict[str, ElementKind]:
    """Look up each identifier once and map it to its element kind."""
    return {
        identifier: classify_element(definition.get_element(identifier))
        for identifier in identifiers
    }
