"""Schemas for form definitions."""

from pydantic import BaseModel, Field


class FormElement(BaseModel):
    identifier: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=50)
    label: str | None = Field(None, max_length=200)


class FormDefinition(BaseModel):
    identifier: str | None = Field(None, max_length=100)
    elements: list[FormElement] = Field(default_factory=list)

    def get_element(self, identifier: str) -> FormElement | None:
        """Return the element with the given identifier, if defined."""
        for element in self.elements:
            if element.identifier == identifier:
                return element
        return None
