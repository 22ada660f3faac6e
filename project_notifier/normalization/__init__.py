"""Normalization of project request snapshots into notification payloads."""

from .service import (
    coerce_bool,
    file_name_from_object,
    file_name_from_string,
    format_file_list,
    language_pair,
    normalize,
)

__all__ = [
    "normalize",
    "language_pair",
    "format_file_list",
    "file_name_from_string",
    "file_name_from_object",
    "coerce_bool",
]
