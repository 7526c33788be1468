"""Утилиты для генератора"""

from .naming import (
    function_name,
    tag_class_name,
    tag_module_name,
    to_identifier,
    unique_param_names,
)

__all__ = [
    "to_identifier",
    "function_name",
    "unique_param_names",
    "tag_class_name",
    "tag_module_name",
]
