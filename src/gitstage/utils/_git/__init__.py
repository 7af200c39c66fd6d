"""Git utilities for gitstage.

This package provides helper functions shared by the repository layer.
"""

from gitstage.utils._git._common import (
    GIT_DIR_NAME,
    decode_bytes,
    is_nested_repo_root,
    path_to_str,
    split_config_key,
    to_tree_path,
)

__all__ = [
    "GIT_DIR_NAME",
    "decode_bytes",
    "is_nested_repo_root",
    "path_to_str",
    "split_config_key",
    "to_tree_path",
]
