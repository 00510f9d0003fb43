"""Enum definitions for form elements and finishers."""

from enum import Enum


class FormElementType(str, Enum):
    """Element types a form definition can declare."""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"
    FILE_UPLOAD = "file_upload"
    IMAGE_UPLOAD = "image_upload"
    MULTI_FILE_UPLOAD = "multi_file_upload"
    MULTI_IMAGE_UPLOAD = "multi_image_upload"


class ElementKind(str, Enum):
    """
    How the attach-files finisher treats an element.

    - UPLOAD_SINGLE: holds at most one uploaded file
    - UPLOAD_MULTI: holds an ordered collection of uploaded files
    - OTHER: never produces file references
    """

    UPLOAD_SINGLE = "upload_single"
    UPLOAD_MULTI = "upload_multi"
    OTHER = "other"


class FinisherIdentifier(str, Enum):
    """Identifiers finishers are configured and referenced by."""

    SAVE_TO_DATABASE = "SaveToDatabase"
    ATTACH_FILES_TO_RECORD = "AttachFilesToRecord"


UPLOAD_ELEMENT_KINDS: dict[FormElementType, ElementKind] = {
    FormElementType.FILE_UPLOAD: ElementKind.UPLOAD_SINGLE,
    FormElementType.IMAGE_UPLOAD: ElementKind.UPLOAD_SINGLE,
    FormElementType.MULTI_FILE_UPLOAD: ElementKind.UPLOAD_MULTI,
    FormElementType.MULTI_IMAGE_UPLOAD: ElementKind.UPLOAD_MULTI,
}
