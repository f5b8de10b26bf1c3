"""Mirror accepted LeetCode submissions into a GitHub repository, one commit each."""

from leetcode_sync.errors import (
    ConfigError,
    LeetCodeAPIError,
    SyncError,
    UnsupportedLanguageError,
)
from leetcode_sync.naming import COMMIT_MESSAGE, LANG_TO_EXTENSION, normalize_name

__version__ = "1.0.0"

__all__ = [
    "COMMIT_MESSAGE",
    "LANG_TO_EXTENSION",
    "ConfigError",
    "LeetCodeAPIError",
    "SyncError",
    "UnsupportedLanguageError",
    "normalize_name",
]
