from .loader import find_data_file, load_yaml_typed
from .local import CONTENT_KINDS, POSTS, TERMS, USERS, ContentKind, LocalContentReader
from .settings import load_settings

__all__ = [
    "CONTENT_KINDS",
    "ContentKind",
    "LocalContentReader",
    "POSTS",
    "TERMS",
    "USERS",
    "find_data_file",
    "load_settings",
    "load_yaml_typed",
]
