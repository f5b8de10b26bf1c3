import re
from types import MappingProxyType

from leetcode_sync.errors import UnsupportedLanguageError

COMMIT_MESSAGE = "Sync LeetCode submission"

LANG_TO_EXTENSION = MappingProxyType({
    "bash": "sh", "c": "c", "cpp": "cpp", "csharp": "cs",
    "dart": "dart", "elixir": "ex", "erlang": "erl", "golang": "go",
    "java": "java", "javascript": "js", "kotlin": "kt",
    "mssql": "sql", "mysql": "sql", "oraclesql": "sql",
    "php": "php", "python": "py", "python3": "py", "pythondata": "py",
    "postgresql": "sql", "racket": "rkt", "ruby": "rb", "rust": "rs",
    "scala": "scala", "swift": "swift", "typescript": "ts",
})

_WHITESPACE = re.compile(r"\s+")


def normalize_name(name):
    """'Two  Sum' -> 'two_sum'. Used both as the folder name and as the dedup key."""
    return _WHITESPACE.sub("_", name.casefold())


def extension_for(lang, title=None):
    try:
        return LANG_TO_EXTENSION[lang]
    except KeyError:
        raise UnsupportedLanguageError(lang, title) from None


def solution_path(submission):
    ext = extension_for(submission.lang, submission.title)
    return f"problems/{normalize_name(submission.title)}/solution.{ext}"


def commit_message(submission):
    return f"{COMMIT_MESSAGE} - {submission.title} ({submission.lang})"
