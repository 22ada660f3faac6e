"""Field extraction from inconsistently-shaped record snapshots."""

from .fields import (
    FILE_FIELDS,
    SOURCE_LANGUAGE_FIELDS,
    TARGET_LANGUAGE_FIELDS,
    AbsentFiles,
    FileField,
    ListOfFileObjects,
    ListOfNames,
    SingleName,
    extract_files,
    first_present,
    flatten_text,
    get_field,
    is_blank,
)

__all__ = [
    "get_field",
    "first_present",
    "flatten_text",
    "is_blank",
    "extract_files",
    "FileField",
    "AbsentFiles",
    "SingleName",
    "ListOfNames",
    "ListOfFileObjects",
    "FILE_FIELDS",
    "SOURCE_LANGUAGE_FIELDS",
    "TARGET_LANGUAGE_FIELDS",
]
