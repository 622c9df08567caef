# src/slspack/utils/__init__.py

from .utils_files import load_jsonc, remove_path_in_error_message
from .utils_matching import glob_match, is_excluded_raw
from .utils_node import NODE_BUILTIN_MODULES, is_builtin_module
from .utils_paths import camel_case, strip_extension, to_posix


__all__ = [  # noqa: RUF022
    # utils_files
    "load_jsonc",
    "remove_path_in_error_message",
    # utils_matching
    "glob_match",
    "is_excluded_raw",
    # utils_node
    "NODE_BUILTIN_MODULES",
    "is_builtin_module",
    # utils_paths
    "camel_case",
    "strip_extension",
    "to_posix",
]
